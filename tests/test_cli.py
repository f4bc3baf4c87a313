"""Tests for the compatgate command-line entry point."""

import csv
import json

import pytest

from args import parse_args
from compatgate import exit_code_for, main, run
from constants import ExitCodes
from analysis.reporter import report

CATALOG = [
    {"marketingVersion": "2023.3", "branch": 233, "build": 11799, "fix": 241,
     "releaseDate": "2023-12-06", "recommendedToolchain": "Java 17"},
    {"marketingVersion": "2024.3", "branch": 243, "build": 21565, "fix": 193,
     "releaseDate": "2024-11-13", "recommendedToolchain": "Java 21"},
    {"marketingVersion": "2025.1", "branch": 251, "build": 23774, "fix": 435,
     "releaseDate": "2025-04-15", "recommendedToolchain": "Java 21"},
]


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(CATALOG), encoding="utf-8")
    return str(path)


def test_parse_args_targets_and_flags():
    ns = parse_args(["--since", "242", "--until", "252.*", "--targets", "2024.3", "251",
                     "-f", "CSV", "--error-on-warnings"])
    assert ns.SINCE_BUILD == "242"
    assert ns.UNTIL_BUILD == "252.*"
    assert ns.TARGETS == ["2024.3", "251"]
    assert ns.OUTPUT_FORMAT == "csv"
    assert ns.ERROR_ON_WARNINGS is True


def test_all_in_range_exits_zero(catalog_file, capsys):
    code = run(["--since", "242", "--until", "262.*", "--targets", "2024.3", "2025.1",
                "--catalog", catalog_file])
    assert code == ExitCodes.SUCCESS
    out = capsys.readouterr().out
    assert "IN_RANGE" in out


def test_out_of_range_exits_one(catalog_file):
    code = run(["--since", "243", "--until", "243.*", "--targets", "2023.3",
                "--catalog", catalog_file, "-q"])
    assert code == ExitCodes.INCOMPATIBLE


@pytest.mark.parametrize("argv", [
    ["--since", "", "--until", "243.*"],
    ["--until", "243.*"],
    ["--since", "24x"],
    ["--since", "250", "--until", "240.*"],
])
def test_malformed_input_exits_two(catalog_file, argv):
    assert run(argv + ["--catalog", catalog_file, "-q"]) == ExitCodes.INPUT_ERROR


def test_main_exits_with_code(catalog_file):
    with pytest.raises(SystemExit) as exc:
        main(["--since", "250", "--until", "240.*", "--catalog", catalog_file, "-q"])
    assert exc.value.code == 2


def test_unbounded_is_warning_only_with_flag(catalog_file):
    base = ["--since", "242", "--targets", "2025.1", "--catalog", catalog_file, "-q"]
    assert run(base) == ExitCodes.SUCCESS
    assert run(base + ["--error-on-warnings"]) == ExitCodes.EXIT_WARNINGS


def test_unknown_target_is_warning(catalog_file):
    base = ["--since", "242", "--until", "252.*", "--targets", "2030.1", "--catalog", catalog_file, "-q"]
    assert run(base) == ExitCodes.SUCCESS
    assert run(base + ["--error-on-warnings"]) == ExitCodes.EXIT_WARNINGS


def test_catalog_errors_exit_four(tmp_path):
    missing = str(tmp_path / "missing.json")
    assert run(["--since", "242", "--catalog", missing, "-q"]) == ExitCodes.CATALOG_ERROR

    dup = tmp_path / "dup.json"
    dup.write_text(json.dumps([CATALOG[1], dict(CATALOG[2], branch=243)]), encoding="utf-8")
    assert run(["--since", "242", "--catalog", str(dup), "-q"]) == ExitCodes.CATALOG_ERROR


def test_manifest_with_cli_override(tmp_path, catalog_file):
    plugin_xml = tmp_path / "plugin.xml"
    plugin_xml.write_text('<idea-plugin><idea-version since-build="233" until-build="241.*"/></idea-plugin>',
                          encoding="utf-8")
    argv = ["-m", str(plugin_xml), "--targets", "2025.1", "--catalog", catalog_file, "-q"]
    assert run(argv) == ExitCodes.INCOMPATIBLE
    assert run(argv + ["--until", "252.*"]) == ExitCodes.SUCCESS


def test_missing_manifest_exits_two(tmp_path, catalog_file):
    argv = ["-m", str(tmp_path / "nope.xml"), "--catalog", catalog_file, "-q"]
    assert run(argv) == ExitCodes.INPUT_ERROR


def test_issue_file_included_in_json_export(tmp_path, catalog_file):
    issues = tmp_path / "issues.json"
    issues.write_text(json.dumps([{"kind": "DEPRECATED", "location": "src/A.kt:1"}]), encoding="utf-8")
    out = tmp_path / "report.json"
    code = run(["--since", "243", "--until", "243.*", "--targets", "all",
                "--catalog", catalog_file, "--issues", str(issues), "-o", str(out), "-q"])
    assert code == ExitCodes.INCOMPATIBLE

    data = json.loads(out.read_text(encoding="utf-8"))
    assert [t["marketingVersion"] for t in data["perTarget"]] == ["2023.3", "2024.3", "2025.1"]
    assert data["summary"]["BELOW_RANGE"] == 1
    assert data["summary"]["ABOVE_RANGE"] == 1
    assert data["suggestedRange"]["sinceBuild"] == "233"
    assert data["suggestedRange"]["untilBuild"] == "251.*"
    assert data["issues"][0]["kind"] == "DEPRECATED"


def test_bad_issue_file_exits_two(tmp_path, catalog_file):
    issues = tmp_path / "issues.json"
    issues.write_text("{}", encoding="utf-8")
    argv = ["--since", "242", "--catalog", catalog_file, "--issues", str(issues), "-q"]
    assert run(argv) == ExitCodes.INPUT_ERROR


def test_csv_export(tmp_path, catalog_file):
    out = tmp_path / "report.csv"
    run(["--since", "243", "--until", "243.*", "--targets", "2023.3,2024.3",
         "--catalog", catalog_file, "-o", str(out), "-q"])
    rows = list(csv.reader(out.open("r", encoding="utf-8")))
    assert rows[0] == ["marketing_version", "build_number", "release_date",
                       "recommended_toolchain", "outcome", "distance"]
    assert rows[1] == ["2023.3", "233.11799.241", "2023-12-06", "Java 17", "BELOW_RANGE", "10"]
    assert rows[2][4:] == ["IN_RANGE", ""]


def test_list_catalog(capsys, catalog_file):
    assert run(["--list-catalog", "--catalog", catalog_file]) == ExitCodes.SUCCESS
    out = capsys.readouterr().out
    assert "2024.3" in out and "243.21565.193" in out


def test_default_target_uses_bundled_catalog(capsys):
    assert run(["--since", "221"]) == ExitCodes.SUCCESS
    assert "UNBOUNDED_ABOVE" in capsys.readouterr().out


def test_exit_code_for_empty_report():
    assert exit_code_for(report([]), error_on_warnings=True) == ExitCodes.SUCCESS
