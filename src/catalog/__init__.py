"""IDE release catalog.

- catalog.py: CatalogEntry and the immutable VersionCatalog lookup table
- builtin.py: bundled release records
- loader.py: JSON/YAML/CSV file and HTTP(S) catalog sources
"""

from .catalog import CatalogEntry, VersionCatalog, default_catalog

__all__ = ["CatalogEntry", "VersionCatalog", "default_catalog"]
