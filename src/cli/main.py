# SPDX-License-Identifier: MIT
"""Command-line interface for upgrading legacy document exports."""

from __future__ import annotations

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any, Callable

import logfire

from constants import DOCUMENT_KINDS, LOG_LEVELS, USER_ID
from io_utils import QuarantineWriter, load_json_document, upgrade_jsonl
from observability import telemetry
from observability.monitoring import init_logfire
from runtime.settings import Settings, load_settings
from upgrades import get_default_experiment_query


# Module logger for CLI diagnostics mirroring
logger = logging.getLogger(__name__)


def _print_version() -> None:
    """Print the installed package version."""
    try:
        pkg_version = version("schema-upgrades")
    except PackageNotFoundError:  # pragma: no cover - fallback for source checkouts
        pkg_version = "unknown"
    line = f"schema-upgrades {pkg_version}"
    print(line)
    logger.info(line)


def _configure_logging(args: argparse.Namespace, settings: Settings) -> None:
    """Configure Logfire from the configured level and verbosity flags."""
    index = LOG_LEVELS.index(settings.log_level) + args.verbose - args.quiet
    index = max(0, min(len(LOG_LEVELS) - 1, index))
    init_logfire(settings.logfire_token, LOG_LEVELS[index])


def _cmd_upgrade(args: argparse.Namespace, settings: Settings) -> int:
    """Upgrade a JSONL export of ``args.kind`` documents."""
    quarantine = None
    if not args.no_quarantine:
        quarantine = QuarantineWriter(settings.quarantine_dir)
    report = upgrade_jsonl(
        args.kind,
        Path(args.input),
        Path(args.output),
        settings=settings,
        validate=args.validate,
        quarantine=quarantine,
    )
    logger.info(
        "Wrote %d %s document(s) to %s", report.written, args.kind, args.output
    )
    if settings.strict and report.failed:
        return 1
    return 0


def _cmd_default_query(args: argparse.Namespace, settings: Settings) -> int:
    """Print the default experiment query for a settings document."""
    ds_settings = load_json_document(args.settings) if args.settings else None
    print(get_default_experiment_query(ds_settings, args.user_id_type, args.schema))
    return 0


def _add_common_args(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Add CLI options shared across subcommands."""
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (repeatable)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="count",
        default=0,
        help="Decrease logging verbosity (repeatable)",
    )
    return parser


def _add_upgrade_subparser(
    subparsers: argparse._SubParsersAction,
    common: argparse.ArgumentParser,
) -> argparse.ArgumentParser:
    """Register the ``upgrade`` subcommand."""
    parser = subparsers.add_parser(
        "upgrade",
        parents=[common],
        help="Upgrade a JSONL export to the current document shape",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("kind", choices=DOCUMENT_KINDS, help="Document kind")
    parser.add_argument("--input", required=True, help="Legacy JSONL export")
    parser.add_argument("--output", required=True, help="File to write the results")
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Reject documents that do not match the current shape",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Exit with status 1 when any document fails",
    )
    parser.add_argument(
        "--quarantine-dir",
        default=None,
        help="Directory receiving rejected documents",
    )
    parser.add_argument(
        "--no-quarantine",
        action="store_true",
        help="Only log rejected documents",
    )
    parser.add_argument(
        "--conversion-window-hours",
        type=float,
        default=None,
        help="Conversion window for metrics that have none",
    )
    parser.set_defaults(func=_cmd_upgrade)
    return parser


def _add_default_query_subparser(
    subparsers: argparse._SubParsersAction,
    common: argparse.ArgumentParser,
) -> argparse.ArgumentParser:
    """Register the ``default-query`` subcommand."""
    parser = subparsers.add_parser(
        "default-query",
        parents=[common],
        help="Print the default experiment exposure query",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--settings",
        default=None,
        help="JSON file holding the data source settings",
    )
    parser.add_argument(
        "--user-id-type", default=USER_ID, help="Identifier type to select"
    )
    parser.add_argument("--schema", default=None, help="Default table schema")
    parser.set_defaults(func=_cmd_default_query)
    return parser


def _build_parser() -> argparse.ArgumentParser:
    """Return an argument parser configured with subcommands."""
    parser = argparse.ArgumentParser(
        description=(
            "Upgrade exported metric, data source and feature documents to "
            "their current shape."
        ),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print the schema-upgrades version and exit.",
    )
    common = _add_common_args(
        argparse.ArgumentParser(
            add_help=False, formatter_class=argparse.ArgumentDefaultsHelpFormatter
        )
    )
    subparsers = parser.add_subparsers(dest="command")
    _add_upgrade_subparser(subparsers, common)
    _add_default_query_subparser(subparsers, common)
    return parser


def _apply_args_to_settings(args: argparse.Namespace, settings: Settings) -> None:
    """Override settings fields based on CLI arguments."""
    arg_mapping: dict[str, tuple[str, Callable[[Any], Any] | None]] = {
        "strict": ("strict", None),
        "quarantine_dir": ("quarantine_dir", Path),
        "conversion_window_hours": ("default_conversion_window_hours", None),
    }
    for arg_name, (attr, converter) in arg_mapping.items():
        value = getattr(args, arg_name, None)
        if value is not None:  # branch: override settings when flag provided
            setattr(settings, attr, converter(value) if converter else value)


def _execute_subcommand(args: argparse.Namespace, settings: Settings) -> int:
    """Configure logging and dispatch to the chosen subcommand."""
    _configure_logging(args, settings)
    telemetry.reset()
    try:
        with logfire.span("cli.command", attributes={"command": args.command}):
            code = args.func(args, settings)
    finally:
        telemetry.print_summary()
        logfire.force_flush()
    return code


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and dispatch to the requested subcommand."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.version:
        _print_version()
        return
    if args.command is None:
        parser.print_help()
        raise SystemExit(1)
    try:
        settings = load_settings(args.config)
    except RuntimeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc
    _apply_args_to_settings(args, settings)
    code = _execute_subcommand(args, settings)
    if code:
        raise SystemExit(code)


if __name__ == "__main__":
    # Allow module to be executed as a standalone script
    main()
