"""Command line entry point for i18n-keysync."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog

from keysync import __version__
from keysync.config import load_config
from keysync.config.settings import Settings
from keysync.errors import ConfigurationError
from keysync.runner import run_sync, write_report

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2

DESCRIPTION = """\
Find the translation keys a project uses, compare them with the existing
per-language JSON files and regenerate those files: new keys are added as
placeholders (prefixed with --prefix), translated values are preserved and
keys that disappeared upstream are removed.
"""


def setup_logging(debug: bool = False, json_logs: bool = False) -> None:
    """Configure structured logging."""
    level = logging.DEBUG if debug else logging.INFO

    # Clear any existing handlers to prevent duplication
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logging.basicConfig(
        level=level,
        handlers=[handler],
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            (
                structlog.processors.JSONRenderer()
                if json_logs
                else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
            ),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="i18n-keysync",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version", action="version", version=f"i18n-keysync {__version__}"
    )

    parser.add_argument("-s", "--source", type=Path, help="Root directory to scan (required)")
    parser.add_argument(
        "-i", "--input-file", "--inputFile", dest="input_file",
        help="Skeleton file name, without .json, seeding the default language",
    )
    parser.add_argument(
        "-d", "--default-language", dest="default_language",
        help="Language whose files take the reference values instead of placeholders",
    )
    parser.add_argument(
        "-f", "--function-name", "--functionName", dest="function_name",
        help="Function wrapping translatable strings in code (default: __)",
    )
    parser.add_argument("-o", "--output", type=Path, help="Output directory (default: translations)")
    parser.add_argument("-l", "--languages", help='Space separated language codes (default: "en")')
    parser.add_argument("-p", "--prefix", help="Placeholder marker for untranslated keys (default: !<)")
    parser.add_argument(
        "-t", "--transformise", action="store_true", default=None,
        help="Normalize extracted strings into slug keys",
    )
    parser.add_argument("--pattern", help="Glob for JSON sources, relative to --source (default: **/*.json)")
    parser.add_argument(
        "--exclude", action="append",
        help="Extra file name to skip, repeatable (rankmi is always skipped)",
    )
    parser.add_argument(
        "--scan-code", dest="scan_code", action="store_true", default=None,
        help="Build the reference keys from --function-name calls in source code",
    )
    parser.add_argument(
        "--code-output-file", dest="code_output_file",
        help="File written per language in --scan-code mode (default: messages.json)",
    )
    parser.add_argument(
        "--check", action="store_true", default=None,
        help="Do not write anything, exit with 1 when a file is out of date",
    )
    parser.add_argument("--report", dest="report_file", type=Path, help="Write a JSON report of the run")
    parser.add_argument("--config-file", type=Path, help="Path to a YAML configuration file")
    parser.add_argument("--debug", action="store_true", default=None, help="Enable debug logging")
    parser.add_argument("--json-logs", dest="json_logs", action="store_true", default=None, help="Log JSON lines")

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)


def _cli_values(args: argparse.Namespace) -> Dict[str, Any]:
    values = vars(args).copy()
    values.pop("config_file", None)
    return values


def run(args: argparse.Namespace) -> int:
    try:
        settings: Settings = load_config(_cli_values(args), config_file=args.config_file)
    except ConfigurationError as e:
        setup_logging(bool(args.debug), bool(args.json_logs))
        structlog.get_logger().error("Configuration error", error=e.message, config_key=e.context.get("config_key"))
        return EXIT_CONFIG

    setup_logging(settings.debug, settings.json_logs)
    report = run_sync(settings)

    if settings.report_file is not None:
        try:
            write_report(report, settings.report_file)
        except OSError:
            return EXIT_FAILED

    if report.errors.has_errors:
        structlog.get_logger().error("Some translation files failed", **report.errors.get_error_stats())
    if report.failures:
        return EXIT_FAILED
    if settings.check and report.changed:
        return EXIT_FAILED
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    return run(parse_args(argv))


if __name__ == "__main__":
    sys.exit(main())
