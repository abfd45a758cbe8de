# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from bulkplan.adapters.snapshot import load_snapshot
from bulkplan.app import dry_run_import
from bulkplan.config import ConfigurationError, configure_logging, get_import_config
from bulkplan.domain.parsing import generate_template
from bulkplan.domain.reconciliation import ImportOptions
from bulkplan.domain.schema import EntityKind, available_schemas

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from bulkplan.app import DryRunReport

log = logging.getLogger(__name__)

ENTITY_KIND_CHOICES = [kind.value for kind in EntityKind]


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plan bulk CSV imports without applying them")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    dry_run = subparsers.add_parser("dry-run", help="Validate a CSV file and plan its changes")
    dry_run.add_argument("kind", choices=ENTITY_KIND_CHOICES, help="Entity kind to import")
    dry_run.add_argument("file", type=str, help="Path to the CSV file")
    dry_run.add_argument(
        "--snapshot",
        type=str,
        help="JSON snapshot of existing entities (defaults to the configured database)",
    )
    dry_run.add_argument(
        "--update-existing",
        action="store_true",
        help="Plan updates for existing entities whose data differs",
    )
    dry_run.add_argument(
        "--skip-duplicates",
        action="store_true",
        help="Skip rows matching an existing entity",
    )
    dry_run.add_argument(
        "--delete-mode",
        action="store_true",
        help="Plan deletion of the entities listed in the file",
    )
    dry_run.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help="Number of changes per execution batch (defaults to config)",
    )

    template = subparsers.add_parser("template", help="Print the header line for an empty file")
    template.add_argument("kind", choices=ENTITY_KIND_CHOICES, help="Entity kind")

    subparsers.add_parser("schemas", help="List importable entity kinds")

    return parser.parse_args(list(argv))


def _build_options(args: argparse.Namespace) -> ImportOptions:
    batch_size = args.batch_size
    if batch_size is None:
        batch_size = get_import_config().batch_size
    return ImportOptions(
        update_existing=args.update_existing,
        skip_duplicates=args.skip_duplicates,
        delete_mode=args.delete_mode,
        batch_size=batch_size,
    )


def _log_report(report: DryRunReport) -> None:
    parse_result = report.parse_result
    summary = report.result.summary
    for warning in parse_result.warnings:
        log.warning(warning)
    for row in parse_result.rows:
        for warning in row.warnings:
            log.warning("Row %s: %s", row.line_number, warning)
    log.info(
        "Rows: total=%s, valid=%s, invalid=%s",
        parse_result.total_rows,
        parse_result.valid_rows,
        parse_result.error_rows,
    )
    log.info(
        "Planned: creates=%s, updates=%s, deletes=%s, skips=%s, errors=%s",
        summary.creates,
        summary.updates,
        summary.deletes,
        summary.skips,
        summary.errors,
    )
    for error in report.result.errors:
        log.warning("Row %s: %s", error.row, error.error)
    for warning in report.result.warnings:
        log.info("Row %s: %s", warning.row, warning.warning)
    log.info(
        "Estimate: %s batch(es), ~%ss",
        report.estimate.batch_count,
        report.estimate.estimated_seconds,
    )
    for issue in report.estimate.potential_issues:
        log.warning(issue)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        options = _build_options(parsed_args) if parsed_args.command == "dry-run" else None
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)
    except ConfigurationError:
        log.exception("Invalid configuration")
        sys.exit(1)

    try:
        if parsed_args.command == "dry-run":
            lookup = load_snapshot(parsed_args.snapshot) if parsed_args.snapshot else None
            report = dry_run_import(parsed_args.file, parsed_args.kind, options, lookup=lookup)
            _log_report(report)
        elif parsed_args.command == "template":
            print(generate_template(parsed_args.kind))
        elif parsed_args.command == "schemas":
            for info in available_schemas():
                print(f"{info.key}\t{info.name}\t{info.description}")
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during import planning")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
