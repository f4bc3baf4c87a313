"""Argument parsing functionality for CompatGate."""

import argparse
from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog=Constants.PROG_NAME,
        description=(
            "CompatGate - IntelliJ Platform plugin build-range compatibility checker"
        ),
        add_help=True,
    )

    parser.add_argument("--since",
                        dest="SINCE_BUILD",
                        help="Declared sinceBuild, i.e: 242 (overrides the manifest)",
                        action="store", type=str)
    parser.add_argument("--until",
                        dest="UNTIL_BUILD",
                        help="Declared untilBuild, i.e: 252.* (overrides the manifest)",
                        action="store", type=str)
    parser.add_argument("-m", "--manifest",
                        dest="MANIFEST",
                        help="plugin.xml, gradle.properties, build.gradle(.kts) or project directory "
                             "to read the declared range from",
                        action="store", type=str)
    parser.add_argument("--targets",
                        dest="TARGETS",
                        help="IDE versions to check: marketing versions (2024.3), branches (243), "
                             "'latest' or 'all'. Space or comma separated (default: latest)",
                        nargs="+", type=str)

    parser.add_argument("--catalog",
                        dest="CATALOG",
                        help="Catalog file (JSON, YAML, CSV) or HTTP(S) URL replacing the bundled catalog",
                        action="store", type=str)
    parser.add_argument("--issues",
                        dest="ISSUES",
                        help="JSON/YAML file of API usage issues to include in the report",
                        action="store", type=str)
    parser.add_argument("--list-catalog",
                        dest="LIST_CATALOG",
                        help="Print the catalog and exit.",
                        action="store_true")

    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to output file (JSON or CSV)",
                        action="store",
                        type=str)
    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (json or csv). If not specified, inferred from --output extension; defaults to json.",
                        action="store",
                        type=str.lower,
                        choices=Constants.SUPPORTED_FORMATS)

    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("--error-on-warnings",
                        dest="ERROR_ON_WARNINGS",
                        help="Exit with a non-zero status code if warnings are present.",
                        action="store_true")
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not output to console.",
                        action="store_true")

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--set",
                        dest="CONFIG_SET",
                        help="Set configuration override (KEY=VALUE format, can be used multiple times)",
                        action="append",
                        type=str,
                        default=[])

    return parser.parse_args(argv)
