"""JSON Schema validation for catalog and API usage issue documents.

Wraps jsonschema Draft7 validation; loaders call validate_document() before
converting records into model objects so errors point at the offending
record instead of surfacing as a KeyError later.
"""

from __future__ import annotations

from typing import Any, Dict

from jsonschema import Draft7Validator


class SchemaError(ValueError):
    """Raised when data fails to validate against a provided schema."""


_NON_NEGATIVE_INT = {"type": "integer", "minimum": 0}

CATALOG_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "array",
    "items": {
        "type": "object",
        "required": ["marketingVersion", "branch", "releaseDate", "recommendedToolchain"],
        "properties": {
            "marketingVersion": {"type": "string", "minLength": 1},
            "branch": _NON_NEGATIVE_INT,
            "build": {"anyOf": [_NON_NEGATIVE_INT, {"type": "null"}]},
            "fix": {"anyOf": [_NON_NEGATIVE_INT, {"type": "null"}]},
            "releaseDate": {"type": "string", "pattern": r"^\d{4}-\d{2}-\d{2}$"},
            "recommendedToolchain": {"type": "string"},
        },
    },
}

ISSUES_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "array",
    "items": {
        "type": "object",
        "required": ["kind", "location"],
        "properties": {
            "kind": {
                "type": "string",
                "enum": ["DEPRECATED", "INTERNAL", "EXPERIMENTAL", "INCOMPATIBLE_CHANGE"],
            },
            "location": {"type": "string", "minLength": 1},
            "replacement": {"type": ["string", "null"]},
            "message": {"type": ["string", "null"]},
        },
    },
}


def validate_document(schema: Dict[str, Any], data: Any, label: str = "document") -> None:
    """Validate data strictly and raise on the first error.

    Args:
        schema: Draft-07 JSON Schema dict.
        data:   Parsed document to validate.
        label:  Name used in the error message (e.g. "catalog").
    """
    validator = Draft7Validator(schema)
    errs = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errs:
        first = errs[0]
        path = "/".join([str(p) for p in first.path])
        msg = f"Invalid {label} at '{path}': {first.message}"
        raise SchemaError(msg)
