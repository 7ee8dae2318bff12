from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from devicebridge.app import reconcile_source, snapshot_catalog
from devicebridge.config import (
    ConfigurationError,
    SourceName,
    configure_logging,
    get_reconcile_config,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid integer: {value}") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError(f"Must be positive: {value}")
    return number


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile the device catalog with its sources")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log per-record resolution detail",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile = subparsers.add_parser("reconcile", help="Reconcile one source with the catalog")
    reconcile.add_argument(
        "source",
        choices=[str(name) for name in SourceName],
        help="Source to reconcile",
    )
    reconcile.add_argument(
        "--input",
        type=Path,
        help="Read the source from this file instead of fetching it",
    )
    reconcile.add_argument(
        "--catalog",
        type=Path,
        help="Catalog file (defaults to the configured data directory)",
    )
    reconcile.add_argument(
        "--report",
        type=Path,
        help="Write the review report as JSON to this file",
    )
    reconcile.add_argument(
        "--apply",
        action="store_true",
        help="Write auto-accepted merges back to the catalog",
    )
    reconcile.add_argument(
        "--workers",
        type=_positive_int,
        help="Number of reconciliation workers (defaults to config, then CPU count)",
    )

    snapshot = subparsers.add_parser("snapshot", help="Render the catalog snapshot")
    snapshot.add_argument(
        "--catalog",
        type=Path,
        help="Catalog file (defaults to the configured data directory)",
    )
    snapshot.add_argument(
        "--output",
        type=Path,
        help="Write the snapshot to this file instead of stdout",
    )

    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "reconcile":
            config = get_reconcile_config()
            if parsed_args.workers is not None:
                config = replace(config, max_workers=parsed_args.workers)
            summary = reconcile_source(
                parsed_args.source,
                input_path=parsed_args.input,
                catalog_path=parsed_args.catalog,
                report_path=parsed_args.report,
                apply=parsed_args.apply,
                config=config,
            )
            log.info(
                "Reconciled %s: %s",
                summary.source_name,
                ", ".join(f"{name}={count}" for name, count in summary.report.counts.items()),
            )
        elif parsed_args.command == "snapshot":
            text = snapshot_catalog(
                catalog_path=parsed_args.catalog, output_path=parsed_args.output
            )
            if parsed_args.output is None:
                sys.stdout.write(text)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except (ValueError, ConfigurationError):
        log.exception("Invalid configuration")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
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
