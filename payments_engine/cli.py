"""Command-line entrypoint for replaying a transactions file."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from payments_engine.application.use_cases import LedgerReplayContext, ReplayLedgerUseCase
from payments_engine.infrastructure.parsing.utils import MalformedRecordError
from payments_engine.infrastructure.repositories.csv_repositories import CsvEventSource
from payments_engine.logging_config import setup_logging
from payments_engine.presentation.accounts_report import render_csv, snapshots_to_rows

logger = logging.getLogger("payments_engine.cli")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Replay a transactions CSV into per-client account balances")
    parser.add_argument("transactions", type=Path, help="Path to the transactions CSV file")
    parser.add_argument("-o", "--output", type=Path, help="Write the accounts CSV here instead of stdout")
    parser.add_argument(
        "--report-errors",
        action="store_true",
        help="Log every rejected event to stderr",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for stderr output (default: WARNING)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    setup_logging(args.log_level)

    try:
        event_source = CsvEventSource(args.transactions)
        use_case = ReplayLedgerUseCase(LedgerReplayContext(event_source=event_source))
        report = use_case.execute()
    except OSError as exc:
        logger.error("Cannot read %s: %s", args.transactions, exc)
        return 1
    except MalformedRecordError as exc:
        logger.error("Malformed input in %s at %s", args.transactions, exc)
        return 1

    if args.report_errors:
        for rejection in report.rejections:
            event = rejection.event
            logger.warning(
                "%s client=%d tx=%d rejected: %s",
                event.event_type.value,
                event.client_id,
                event.transaction_id,
                rejection.message,
            )

    payload = render_csv(snapshots_to_rows(report.snapshots))
    if args.output:
        args.output.write_bytes(payload)
    else:
        sys.stdout.buffer.write(payload)
        sys.stdout.flush()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
