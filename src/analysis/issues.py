"""API usage issues reported by an external static-analysis step.

The checker does not discover these itself; it only reads them from a
JSON or YAML file and passes them through to the report.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

import yaml

from schema_validate import ISSUES_SCHEMA, SchemaError, validate_document
from versioning.errors import IssueFileError

logger = logging.getLogger(__name__)


class IssueKind(Enum):
    """Category of a flagged API usage."""
    DEPRECATED = "DEPRECATED"
    INTERNAL = "INTERNAL"
    EXPERIMENTAL = "EXPERIMENTAL"
    INCOMPATIBLE_CHANGE = "INCOMPATIBLE_CHANGE"


@dataclass(frozen=True)
class ApiUsageIssue:
    """One flagged API usage with its location and suggested replacement."""
    kind: IssueKind
    location: str
    replacement: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ApiUsageIssue":
        return cls(
            kind=IssueKind(record["kind"]),
            location=record["location"],
            replacement=record.get("replacement"),
            message=record.get("message"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "location": self.location,
            "replacement": self.replacement,
            "message": self.message,
        }


def load_issues(path: str) -> List[ApiUsageIssue]:
    """Load API usage issues from a JSON or YAML list.

    Raises:
        IssueFileError: The file is missing, unparsable, or fails validation.
    """
    if not os.path.isfile(path):
        raise IssueFileError(f"Issue file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as fh:
            if path.lower().endswith(".json"):
                data = json.load(fh)
            else:
                data = yaml.safe_load(fh)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise IssueFileError(f"Issue file could not be read: {e}") from e

    if data is None:
        data = []
    if isinstance(data, dict) and "issues" in data:
        data = data["issues"]
    try:
        validate_document(ISSUES_SCHEMA, data, label="issue file")
    except SchemaError as e:
        raise IssueFileError(str(e)) from e

    issues = [ApiUsageIssue.from_record(r) for r in data]
    logger.info("Loaded %d API usage issues from %s", len(issues), path)
    return issues
