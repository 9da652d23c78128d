"""Worker: print the merged activity feed (or available UTXOs) for an account.

Usage:
    python -m worker.show_activity --account-id 0
    python -m worker.show_activity --account-id 0 --history-type Send
    python -m worker.show_activity --account-id 0 --daily --period monthly
    python -m worker.show_activity --section utxos --sort ID --contain-locked
"""

import argparse
import asyncio
import logging
import sys

import structlog

from config import get_settings
from db.connection import get_session, init_db
from db.enums import HistoryType, PeriodType, Section, UtxoSortType
from walletfeed.services.activity import ActivityService
from walletfeed.services.daily import aggregate_periods, format_summary_line
from walletfeed.services.feed_client import RemoteLedgerFeed
from walletfeed.services.local_history import LocalHistoryStore

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def configure_logging(debug: bool = False) -> None:
    """Route structlog output to stderr; stdout carries only the report."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.INFO),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )


async def _show_activity(args: argparse.Namespace, service: ActivityService) -> None:
    result = await service.query_activity(args.server_url, args.account_id, args.history_type)
    for warn in result.warnings:
        logger.warning("activity_warning", detail=warn)

    if args.daily:
        buckets = aggregate_periods(
            result.activities,
            args.period,
            timestamp_unit=get_settings().feed.timestamp_unit,
        )
        for bucket in buckets:
            print(format_summary_line(bucket))
        return

    for item in result.activities:
        fee = f" fee={item.fee}" if item.fee is not None else ""
        print(f"{item.height:>10}  {item.change_amount:>24}  {item.message}{fee}")


async def _show_utxos(args: argparse.Namespace, service: ActivityService) -> None:
    items = await service.query_available_utxos(args.server_url, args.sort, args.contain_locked)
    for item in items:
        lock = " (locked)" if item.locked else ""
        print(f"{item.id:>8}  {item.amount:>24}{lock}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Show the wallet activity feed")
    parser.add_argument(
        "--section", type=Section, choices=list(Section), default=Section.ACTIVITY,
        help="activity or utxos",
    )
    parser.add_argument("--account-id", "-a", type=int, default=0, help="Local account id")
    parser.add_argument(
        "--server-url", "-s", default=get_settings().feed.server_url,
        help="Wallet server base URL",
    )
    parser.add_argument(
        "--history-type", "-t", type=HistoryType.parse, default=HistoryType.ALL,
        help="All, Send or Receive",
    )
    parser.add_argument("--daily", action="store_true", help="Print per-period totals")
    parser.add_argument(
        "--period", type=PeriodType, choices=list(PeriodType), default=PeriodType.DAILY,
    )
    parser.add_argument(
        "--sort", type=UtxoSortType, choices=list(UtxoSortType), default=UtxoSortType.AMOUNT,
    )
    parser.add_argument("--contain-locked", action="store_true", default=False)
    args = parser.parse_args(argv)

    configure_logging(get_settings().debug)
    init_db()
    with get_session() as session:
        service = ActivityService(RemoteLedgerFeed(), LocalHistoryStore(session))
        logger.info("Querying wallet server", server_url=args.server_url, section=args.section.value)
        if args.section == Section.UTXOS:
            asyncio.run(_show_utxos(args, service))
        else:
            asyncio.run(_show_activity(args, service))


if __name__ == "__main__":
    main()
