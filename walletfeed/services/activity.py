"""Activity feed: fetch, group by height, merge local metadata, filter, sort."""

from collections.abc import Sequence
from typing import Protocol

import structlog

from db.enums import HistoryType, UtxoSortType
from walletfeed.services.amounts import is_negative, to_decimal
from walletfeed.services.grouping import group_by_height
from walletfeed.services.merger import HistoryMerger
from walletfeed.services.schemas.ledger import (
    HeightGroup,
    LocalTxMetadata,
    MergedActivity,
    RawLedgerRecord,
    UtxoItem,
)
from walletfeed.services.schemas.results import ActivityResult, LocalHistoryLookup

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class LedgerFeed(Protocol):
    async def fetch(self, server_url: str) -> list[RawLedgerRecord]: ...

    async def fetch_available_utxos(self, server_url: str) -> list[UtxoItem]: ...


class HistoryReader(Protocol):
    async def get(self, account_id: int) -> list[LocalTxMetadata]: ...


async def read_local_history(store: HistoryReader | None, account_id: int) -> LocalHistoryLookup:
    """Read local metadata; any failure degrades to an empty lookup."""
    if store is None:
        return LocalHistoryLookup()
    try:
        entries: list[LocalTxMetadata] = await store.get(account_id)
    except Exception as e:
        logger.warning("Local history unavailable", account_id=account_id, error=str(e))
        return LocalHistoryLookup.unavailable(str(e))
    return LocalHistoryLookup.from_entries(entries or [])


def matches_history_type(activity: MergedActivity, history_type: HistoryType) -> bool:
    match history_type:
        case HistoryType.SEND:
            return is_negative(activity.amount)
        case HistoryType.RECEIVE:
            return not is_negative(activity.amount)
        case _:
            return True


def build_activity(
    records: Sequence[RawLedgerRecord],
    lookup: LocalHistoryLookup | None = None,
    history_type: HistoryType | str = HistoryType.ALL,
) -> list[MergedActivity]:
    """Pure pipeline over an already fetched batch. Newest first."""
    kind: HistoryType = HistoryType.parse(history_type)
    if not records:
        return []

    groups: list[HeightGroup] = group_by_height(records)
    merged: list[MergedActivity] = HistoryMerger(lookup).merge(groups, records)
    kept: list[MergedActivity] = [m for m in merged if matches_history_type(m, kind)]
    # sorted() is stable, equal timestamps keep grouping order.
    return sorted(kept, key=lambda m: m.timestamp, reverse=True)


def sort_utxos(
    items: Sequence[UtxoItem],
    sort_type: UtxoSortType | str = UtxoSortType.AMOUNT,
    contain_locked: bool = False,
) -> list[UtxoItem]:
    order: UtxoSortType = UtxoSortType(sort_type)
    match order:
        case UtxoSortType.AMOUNT:
            ordered = sorted(items, key=lambda u: to_decimal(u.amount), reverse=True)
        case UtxoSortType.ID:
            ordered = sorted(items, key=lambda u: u.id, reverse=True)
    if contain_locked:
        return ordered
    return [u for u in ordered if not u.locked]


class ActivityService:
    """Runs the activity pipeline against a remote feed and the local store."""

    def __init__(self, feed: LedgerFeed, store: HistoryReader | None = None) -> None:
        self.feed: LedgerFeed = feed
        self.store: HistoryReader | None = store

    async def query_activity(
        self,
        server_url: str,
        account_id: int,
        history_type: HistoryType | str = HistoryType.ALL,
    ) -> ActivityResult:
        kind: HistoryType = HistoryType.parse(history_type)
        # Fetch and validation failures propagate; there is no partial result.
        records: list[RawLedgerRecord] = await self.feed.fetch(server_url)
        lookup: LocalHistoryLookup = await read_local_history(self.store, account_id)

        activities: list[MergedActivity] = build_activity(records, lookup, kind)
        warnings: list[str] = []
        if not lookup.available:
            warnings.append(f"Local history unavailable: {lookup.error}")

        logger.info(
            "Activity query complete",
            account_id=account_id,
            history_type=kind.value,
            records=len(records),
            activities=len(activities),
        )
        return ActivityResult(
            account_id=account_id,
            history_type=kind,
            activities=activities,
            local_history_available=lookup.available,
            warnings=warnings,
        )

    async def query_available_utxos(
        self,
        server_url: str,
        sort_type: UtxoSortType | str = UtxoSortType.AMOUNT,
        contain_locked: bool = False,
    ) -> list[UtxoItem]:
        items: list[UtxoItem] = await self.feed.fetch_available_utxos(server_url)
        return sort_utxos(items, sort_type, contain_locked)
