"""Catalog source loading.

Reads catalog records from a JSON, YAML or CSV file, or from an HTTP(S)
URL serving JSON/YAML, validates them against CATALOG_SCHEMA and builds a
VersionCatalog. Any failure to obtain usable records raises
CatalogLoadError; duplicate entries raise DuplicateCatalogEntryError.
"""
from __future__ import annotations

import csv
import io
import json
import logging
import os
from datetime import date
from typing import Any, Dict, List, Tuple

import yaml

from common.http_client import safe_get
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from schema_validate import CATALOG_SCHEMA, SchemaError, validate_document
from versioning.errors import CatalogLoadError

from .catalog import CatalogEntry, VersionCatalog

logger = logging.getLogger(__name__)

_INT_FIELDS = ("branch", "build", "fix")


def _is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def _normalize_record(record: Any) -> Any:
    """Coerce loosely-typed values (CSV strings, YAML dates) to schema types."""
    if not isinstance(record, dict):
        return record
    out: Dict[str, Any] = dict(record)
    for key in _INT_FIELDS:
        value = out.get(key)
        if isinstance(value, str):
            value = value.strip()
            if value == "":
                out[key] = None
            elif value.isdigit():
                out[key] = int(value)
    marketing = out.get("marketingVersion")
    if isinstance(marketing, (int, float)) and not isinstance(marketing, bool):
        raise CatalogLoadError(
            f"marketingVersion {marketing!r} was read as a number; "
            "quote it in the catalog file, e.g. marketingVersion: '2024.3'"
        )
    released = out.get("releaseDate")
    if isinstance(released, date):
        out["releaseDate"] = released.isoformat()
    return out


def _extract_records(data: Any) -> Any:
    """Accept either a bare list or a mapping with a ``releases`` list."""
    if isinstance(data, dict) and "releases" in data:
        return data["releases"]
    return data


def parse_catalog_text(text: str, fmt: str) -> List[Dict[str, Any]]:
    """Parse catalog text in the given format (json, yaml or csv) into records."""
    try:
        if fmt == "json":
            data = json.loads(text)
        elif fmt in ("yaml", "yml"):
            data = yaml.safe_load(text)
        elif fmt == "csv":
            data = list(csv.DictReader(io.StringIO(text)))
        else:
            raise CatalogLoadError(f"Unsupported catalog format '{fmt}'")
    except (json.JSONDecodeError, yaml.YAMLError, csv.Error) as e:
        raise CatalogLoadError(f"Catalog could not be parsed as {fmt}: {e}") from e

    records = _extract_records(data)
    if isinstance(records, list):
        records = [_normalize_record(r) for r in records]
    try:
        validate_document(CATALOG_SCHEMA, records, label="catalog")
    except SchemaError as e:
        raise CatalogLoadError(str(e)) from e
    return records


def _format_for(source: str, content_type: str = "") -> str:
    lower = source.lower().split("?", 1)[0]
    if lower.endswith(".csv"):
        return "csv"
    if lower.endswith((".yaml", ".yml")):
        return "yaml"
    if lower.endswith(".json") or "json" in content_type:
        return "json"
    # YAML is a superset of JSON, so it is the safest default
    return "yaml"


def _read_source(source: str) -> Tuple[str, str]:
    """Return (text, content type) for a path or URL."""
    if _is_url(source):
        res = safe_get(source, context="catalog")
        if res.status_code != 200:
            raise CatalogLoadError(
                f"Catalog download failed from {safe_url(source)}: HTTP {res.status_code}"
            )
        return res.text, res.headers.get("Content-Type", "")
    if not os.path.isfile(source):
        raise CatalogLoadError(f"Catalog file not found: {source}")
    try:
        with open(source, "r", encoding="utf-8") as fh:
            return fh.read(), ""
    except OSError as e:
        raise CatalogLoadError(f"Catalog file could not be read: {e}") from e


def load_catalog(source: str) -> VersionCatalog:
    """Load a VersionCatalog from a file path or HTTP(S) URL.

    Raises:
        CatalogLoadError: The source is unreadable, unparsable or invalid.
        DuplicateCatalogEntryError: Two records share a branch or marketing version.
    """
    text, content_type = _read_source(source)
    fmt = _format_for(source, content_type)
    records = parse_catalog_text(text, fmt)

    try:
        entries = [CatalogEntry.from_record(r) for r in records]
    except (KeyError, TypeError, ValueError) as e:
        raise CatalogLoadError(f"Invalid catalog record: {e}") from e

    catalog = VersionCatalog(entries)
    if is_debug_enabled(logger):
        logger.debug(
            "Catalog loaded",
            extra=extra_context(
                event="catalog_loaded",
                component="catalog",
                action="load",
                target=safe_url(source) if _is_url(source) else source,
                count=len(catalog),
            )
        )
    logger.info("Loaded %d catalog entries from %s", len(catalog),
                safe_url(source) if _is_url(source) else source)
    return catalog
