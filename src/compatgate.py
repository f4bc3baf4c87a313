"""CompatGate - IntelliJ Platform plugin build-range compatibility checker

Evaluates a plugin's declared sinceBuild/untilBuild range against a catalog
of known IDE releases and reports which targets fall outside it.

    Returns:
        int: Exit code
"""
import csv
import json
import logging
import os
import sys
from typing import List, Optional, Tuple

from constants import ExitCodes, Constants, OutputFormats
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from args import parse_args
from cli_config import Settings, apply_runtime_overrides, build_settings
from manifest import read_declaration
from versioning.errors import (
    CatalogLoadError,
    CompatError,
    DuplicateCatalogEntryError,
    IssueFileError,
    ManifestError,
)
from versioning.models import CompatibilityRange
from versioning.parser import parse_range
from catalog.catalog import VersionCatalog, default_catalog
from analysis.evaluator import evaluate_all
from analysis.issues import load_issues
from analysis.reporter import Report, render_text, report

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    "marketing_version",
    "build_number",
    "release_date",
    "recommended_toolchain",
    "outcome",
    "distance",
]


class CliExit(Exception):
    """Internal signal carrying the exit code for an early CLI stop."""

    def __init__(self, code: ExitCodes):
        super().__init__(code.name)
        self.code = code


def load_catalog(settings: Settings) -> VersionCatalog:
    """Return the configured catalog, or the bundled one when none is set.

    Catalog problems are fatal at startup.
    """
    if not settings.catalog:
        return default_catalog()
    # Lazy import keeps yaml/requests off the path for --help
    from catalog.loader import load_catalog as _load  # pylint: disable=import-outside-toplevel
    try:
        return _load(settings.catalog)
    except (CatalogLoadError, DuplicateCatalogEntryError) as e:
        logger.error("Catalog could not be loaded: %s", e)
        raise CliExit(ExitCodes.CATALOG_ERROR) from e


def resolve_declaration(args) -> Tuple[Optional[str], Optional[str]]:
    """Collect sinceBuild/untilBuild from the manifest, then apply CLI overrides."""
    since_build, until_build = None, None
    if getattr(args, "MANIFEST", None):
        try:
            decl = read_declaration(args.MANIFEST)
        except ManifestError as e:
            logger.error("%s", e)
            raise CliExit(ExitCodes.INPUT_ERROR) from e
        since_build, until_build = decl.since_build, decl.until_build
    if getattr(args, "SINCE_BUILD", None) is not None:
        since_build = args.SINCE_BUILD
    if getattr(args, "UNTIL_BUILD", None) is not None:
        until_build = args.UNTIL_BUILD
    return since_build, until_build


def export_json(rep: Report, path: str) -> None:
    """Exports the report to a JSON file.

    Args:
        rep (Report): Report to export.
        path (str): File path to export the JSON.
    """
    try:
        with open(path, 'w', encoding='utf-8') as file:
            json.dump(rep.to_dict(), file, ensure_ascii=False, indent=4)
        logging.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logging.error("JSON file couldn't be written to disk: %s", e)
        raise CliExit(ExitCodes.INPUT_ERROR) from e


def export_csv(rep: Report, path: str) -> None:
    """Exports one row per evaluated target to a CSV file.

    Args:
        rep (Report): Report to export.
        path (str): File path to export the CSV.
    """
    rows: List[list] = [CSV_HEADERS]
    for t in rep.per_target:
        rows.append([
            t.entry.marketing_version,
            str(t.entry.build_number),
            t.entry.release_date.isoformat(),
            t.entry.recommended_toolchain,
            t.result.kind.value,
            "" if t.result.distance is None else t.result.distance,
        ])
    try:
        with open(path, 'w', newline='', encoding='utf-8') as file:
            export = csv.writer(file)
            export.writerows(rows)
        logging.info("CSV file has been successfully exported at: %s", path)
    except (OSError, csv.Error) as e:
        logging.error("CSV file couldn't be written to disk: %s", e)
        raise CliExit(ExitCodes.INPUT_ERROR) from e


def write_output(args, rep: Report) -> None:
    """Write the report to --output, inferring the format when not given."""
    fmt = getattr(args, "OUTPUT_FORMAT", None)
    if fmt is None:
        fmt = OutputFormats.CSV.value if args.OUTPUT.lower().endswith(".csv") else OutputFormats.JSON.value
    if fmt == OutputFormats.CSV.value:
        export_csv(rep, args.OUTPUT)
    else:
        export_json(rep, args.OUTPUT)


def format_catalog(catalog: VersionCatalog) -> str:
    lines = []
    for entry in catalog:
        lines.append(
            f"{entry.marketing_version:<10} {entry.branch:<6} {str(entry.build_number):<18} "
            f"{entry.release_date.isoformat()}  {entry.recommended_toolchain}"
        )
    return "\n".join(lines)


def exit_code_for(rep: Report, error_on_warnings: bool) -> ExitCodes:
    """Map a report to the process exit code."""
    if rep.has_incompatible:
        return ExitCodes.INCOMPATIBLE
    if rep.has_warnings and error_on_warnings:
        return ExitCodes.EXIT_WARNINGS
    return ExitCodes.SUCCESS


def _setup_logging(args) -> None:
    # Honor CLI --loglevel by passing it to centralized logger via env
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging()
    if getattr(args, "LOG_FILE", None):
        add_file_handler(args.LOG_FILE)
        logger.info("Logging to file: %s", args.LOG_FILE)


def _check(args, settings: Settings) -> Report:
    catalog = load_catalog(settings)

    since_build, until_build = resolve_declaration(args)
    try:
        compat_range: CompatibilityRange = parse_range(since_build, until_build)
    except CompatError as e:
        logger.error("%s", e)
        raise CliExit(ExitCodes.INPUT_ERROR) from e
    logger.info("Declared range: %s", compat_range)

    issues = []
    if settings.issues:
        try:
            issues = load_issues(settings.issues)
        except IssueFileError as e:
            logger.error("%s", e)
            raise CliExit(ExitCodes.INPUT_ERROR) from e

    targets, unknown = catalog.resolve(settings.targets)
    if is_debug_enabled(logger):
        logger.debug(
            "Resolved targets",
            extra=extra_context(
                event="decision",
                component="cli",
                action="resolve_targets",
                outcome="partial" if unknown else "complete",
                count=len(targets),
            )
        )

    rep = report(
        evaluate_all(compat_range, targets),
        issues,
        declared_range=compat_range,
        unverified=unknown,
    )
    for t in rep.per_target:
        if t.result.is_out_of_range:
            logger.warning("%s (%s) is %s", t.entry.marketing_version, t.entry.build_number, t.result)
    return rep


def run(argv=None) -> ExitCodes:
    """Run the checker and return the exit code instead of exiting."""
    args = parse_args(argv)
    _setup_logging(args)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    settings = build_settings(args)
    apply_runtime_overrides(settings)

    try:
        if args.LIST_CATALOG:
            catalog = load_catalog(settings)
            if not args.QUIET:
                print(format_catalog(catalog))
            return ExitCodes.SUCCESS

        rep = _check(args, settings)
        if not args.QUIET:
            print(render_text(rep))
        if getattr(args, "OUTPUT", None):
            write_output(args, rep)
    except CliExit as stop:
        return stop.code

    code = exit_code_for(rep, settings.error_on_warnings)
    if code == ExitCodes.INCOMPATIBLE:
        logger.warning("One or more targets are outside the declared range.")
    elif rep.has_warnings:
        logger.warning("Compatibility could not be fully verified.")
        if code == ExitCodes.EXIT_WARNINGS:
            logger.error("Warnings present, exiting with non-zero status code.")
    return code


def main(argv=None):
    """Main function of the program."""
    sys.exit(run(argv).value)


if __name__ == "__main__":
    main()
