"""Build number parsing and compatibility range models.

- errors.py: exception taxonomy shared across the project
- models.py: BuildNumber and CompatibilityRange with their ordering rules
- parser.py: sinceBuild/untilBuild parsing
"""

from .errors import (
    CompatError,
    DuplicateCatalogEntryError,
    EmptySinceBuildError,
    MalformedVersionError,
    RangeInversionError,
    UnknownVersionError,
)
from .models import WILDCARD, BuildNumber, CompatibilityRange, compare
from .parser import parse, parse_build_number, parse_range

__all__ = [
    "CompatError",
    "DuplicateCatalogEntryError",
    "EmptySinceBuildError",
    "MalformedVersionError",
    "RangeInversionError",
    "UnknownVersionError",
    "WILDCARD",
    "BuildNumber",
    "CompatibilityRange",
    "compare",
    "parse",
    "parse_build_number",
    "parse_range",
]
