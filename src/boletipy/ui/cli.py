from __future__ import annotations

import argparse
import logging
import sys
from datetime import date, datetime
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from boletipy.app import reconcile_weeks, register_tickets, update_day
from boletipy.config import configure_logging, get_reconciliation_config
from boletipy.domain.draw_calendar import ReconciliationWeek, utcnow, weeks_between

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile lottery tickets against draws")
    subparsers = parser.add_subparsers(dest="command", required=True)

    verify = subparsers.add_parser("verify-week", help="Reconcile tickets for whole weeks")
    verify.add_argument(
        "--week",
        type=str,
        help="Monday (YYYY-MM-DD) of the week to reconcile",
    )
    verify.add_argument(
        "--date",
        type=str,
        help="Any day (YYYY-MM-DD) inside the week to reconcile",
    )
    verify.add_argument(
        "--from",
        dest="start",
        type=str,
        help="First day (YYYY-MM-DD) of a range of weeks",
    )
    verify.add_argument(
        "--to",
        dest="end",
        type=str,
        help="Last day (YYYY-MM-DD) of a range of weeks",
    )
    verify.add_argument(
        "--no-update",
        action="store_true",
        help="Use stored results only; never fetch",
    )
    verify.add_argument(
        "--database-uri",
        type=str,
        help="Store to reconcile against (defaults to config)",
    )

    today = subparsers.add_parser("update-today", help="Store the results of one day")
    today.add_argument(
        "--date",
        type=str,
        help="Day (YYYY-MM-DD) to update, defaults to today",
    )
    today.add_argument(
        "--database-uri",
        type=str,
        help="Store to update (defaults to config)",
    )

    tickets = subparsers.add_parser("import-tickets", help="Register tickets from JSON files")
    tickets.add_argument("files", nargs="+", type=Path, help="JSON ticket files")
    tickets.add_argument(
        "--database-uri",
        type=str,
        help="Store to register into (defaults to config)",
    )

    return parser.parse_args(list(argv))


def _parse_iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid ISO date: {value}") from exc


def _today(now_provider: Callable[[], datetime] = utcnow) -> date:
    return now_provider().astimezone(get_reconciliation_config().timezone).date()


def _selected_weeks(
    args: argparse.Namespace,
    *,
    now_provider: Callable[[], datetime] = utcnow,
) -> list[ReconciliationWeek]:
    chosen = [name for name in ("week", "date", "start") if getattr(args, name) is not None]
    if len(chosen) > 1:
        raise ValueError("Use only one of --week, --date or --from/--to")
    if (args.start is None) != (args.end is None):
        raise ValueError("--from and --to must be given together")

    if args.week is not None:
        return [ReconciliationWeek(_parse_iso_date(args.week))]
    if args.date is not None:
        return [ReconciliationWeek.containing(_parse_iso_date(args.date))]
    if args.start is not None:
        start = _parse_iso_date(args.start)
        end = _parse_iso_date(args.end)
        if start > end:
            raise ValueError("Range start must be before end")
        return list(weeks_between(start, end))
    return [ReconciliationWeek.containing(_today(now_provider))]


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    weeks: list[ReconciliationWeek] = []
    day: date | None = None
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.command == "verify-week":
            weeks = _selected_weeks(parsed_args)
        elif parsed_args.command == "update-today":
            day = _parse_iso_date(parsed_args.date) if parsed_args.date else _today()
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "verify-week":
            reconcile_weeks(
                weeks,
                database_uri=parsed_args.database_uri,
                auto_update=not parsed_args.no_update,
            )
        elif parsed_args.command == "update-today" and day is not None:
            update_day(day, database_uri=parsed_args.database_uri)
        elif parsed_args.command == "import-tickets":
            count = register_tickets(parsed_args.files, database_uri=parsed_args.database_uri)
            log.info("Imported %s ticket(s)", count)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)


def run() -> None:
    """Console-script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    run()
