"""Tests for loading externally supplied API usage issues."""

import json

import pytest

from analysis.issues import ApiUsageIssue, IssueKind, load_issues
from versioning.errors import IssueFileError


def test_load_json_issues(tmp_path):
    path = tmp_path / "issues.json"
    path.write_text(json.dumps([
        {"kind": "DEPRECATED", "location": "src/A.kt:4", "replacement": "NewApi"},
        {"kind": "INCOMPATIBLE_CHANGE", "location": "src/B.kt:9", "message": "removed in 251"},
    ]), encoding="utf-8")
    issues = load_issues(str(path))
    assert issues == [
        ApiUsageIssue(IssueKind.DEPRECATED, "src/A.kt:4", "NewApi"),
        ApiUsageIssue(IssueKind.INCOMPATIBLE_CHANGE, "src/B.kt:9", None, "removed in 251"),
    ]


def test_load_yaml_issues_section(tmp_path):
    path = tmp_path / "issues.yaml"
    path.write_text(
        "issues:\n"
        "  - kind: INTERNAL\n"
        "    location: src/C.kt:1\n",
        encoding="utf-8",
    )
    issues = load_issues(str(path))
    assert issues[0].kind == IssueKind.INTERNAL
    assert issues[0].to_dict()["replacement"] is None


def test_empty_yaml_is_no_issues(tmp_path):
    path = tmp_path / "issues.yaml"
    path.write_text("", encoding="utf-8")
    assert load_issues(str(path)) == []


def test_unknown_kind_rejected(tmp_path):
    path = tmp_path / "issues.json"
    path.write_text(json.dumps([{"kind": "SCARY", "location": "x"}]), encoding="utf-8")
    with pytest.raises(IssueFileError) as exc:
        load_issues(str(path))
    assert "0/kind" in str(exc.value)


def test_missing_file(tmp_path):
    with pytest.raises(IssueFileError):
        load_issues(str(tmp_path / "missing.json"))


def test_unparsable_file(tmp_path):
    path = tmp_path / "issues.json"
    path.write_text("[", encoding="utf-8")
    with pytest.raises(IssueFileError):
        load_issues(str(path))
