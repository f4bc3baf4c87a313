"""Tests for configuration loading and override precedence."""

import json
import logging

from args import parse_args
from cli_config import (
    apply_runtime_overrides,
    build_settings,
    coerce_value,
    collect_overrides,
    deep_merge,
    load_config_file,
)
from constants import Constants


def test_load_yaml_section(tmp_path):
    path = tmp_path / "compatgate.yml"
    path.write_text(
        "compatgate:\n"
        "  catalog: releases.json\n"
        "  targets: ['2024.3', '2025.1']\n"
        "  error_on_warnings: true\n",
        encoding="utf-8",
    )
    cfg = load_config_file(str(path))
    assert cfg["catalog"] == "releases.json"
    assert cfg["targets"] == ["2024.3", "2025.1"]


def test_load_json_without_section(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"issues": "issues.json"}), encoding="utf-8")
    assert load_config_file(str(path)) == {"issues": "issues.json"}


def test_missing_config_warns(tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="cli_config"):
        assert load_config_file(str(tmp_path / "absent.yml")) == {}
    assert "Config file not found" in caplog.text


def test_coerce_value():
    assert coerce_value("true") is True
    assert coerce_value("30") == 30
    assert coerce_value('["2024.3"]') == ["2024.3"]
    assert coerce_value("releases.yaml") == "releases.yaml"


def test_collect_overrides_strips_section_prefix():
    ov = collect_overrides(["compatgate.request_timeout=5", "a.b=1", "bogus"])
    assert ov == {"request_timeout": 5, "a": {"b": 1}}


def test_deep_merge():
    dest = {"a": {"b": 1, "c": 2}, "d": 1}
    deep_merge(dest, {"a": {"b": 9}, "e": 3})
    assert dest == {"a": {"b": 9, "c": 2}, "d": 1, "e": 3}


def test_defaults():
    settings = build_settings(parse_args([]))
    assert settings.catalog is None
    assert settings.targets == [Constants.TARGET_LATEST]
    assert settings.error_on_warnings is False


def test_precedence_cli_over_set_over_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "catalog: from-file.json\n"
        "targets: ['2023.3']\n"
        "issues: file-issues.json\n"
        "request_timeout: 7\n",
        encoding="utf-8",
    )
    args = parse_args([
        "-c", str(path),
        "--set", 'targets=["2024.1"]',
        "--set", "catalog=from-set.json",
        "--catalog", "from-cli.json",
    ])
    settings = build_settings(args)
    assert settings.catalog == "from-cli.json"
    assert settings.targets == ["2024.1"]
    assert settings.issues == "file-issues.json"
    assert settings.request_timeout == 7


def test_apply_runtime_overrides(monkeypatch):
    monkeypatch.setattr(Constants, "REQUEST_TIMEOUT", 30)
    settings = build_settings(parse_args(["--set", "request_timeout=3"]))
    apply_runtime_overrides(settings)
    assert Constants.REQUEST_TIMEOUT == 3


def test_set_keeps_version_strings_verbatim():
    ov = collect_overrides(["targets=2024.10", "compatgate.catalog=2025.json"])
    assert ov["targets"] == "2024.10"
    assert ov["catalog"] == "2025.json"
    settings = build_settings(parse_args(["--set", "targets=2024.10"]))
    assert settings.targets == ["2024.10"]


def test_quoted_false_disables_error_on_warnings(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"error_on_warnings": "false"}), encoding="utf-8")
    assert build_settings(parse_args(["-c", str(path)])).error_on_warnings is False

    path.write_text(json.dumps({"error_on_warnings": "true"}), encoding="utf-8")
    assert build_settings(parse_args(["-c", str(path)])).error_on_warnings is True
