"""Merge height groups with locally recorded transaction metadata."""

from collections import defaultdict
from collections.abc import Sequence

import structlog

from walletfeed.services.amounts import is_negative, positive_fixed
from walletfeed.services.schemas.ledger import (
    HeightGroup,
    LocalTxMetadata,
    MergedActivity,
    RawLedgerRecord,
    UtxoDetail,
)
from walletfeed.services.schemas.results import LocalHistoryLookup

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def describe_amount(amount: str) -> tuple[str, str]:
    """Return ``(message, change_amount)`` for a signed amount."""
    magnitude: str = positive_fixed(amount)
    if is_negative(amount):
        return f"Sent {magnitude}", f"- {magnitude}"
    return f"Received {magnitude}", f"+ {magnitude}"


class HistoryMerger:
    """Turns height groups into display-ready activities."""

    def __init__(self, lookup: LocalHistoryLookup | None = None) -> None:
        self.lookup: LocalHistoryLookup = lookup or LocalHistoryLookup()

    def _utxos_by_height(self, records: Sequence[RawLedgerRecord]) -> dict[int, list[UtxoDetail]]:
        by_height: dict[int, list[UtxoDetail]] = defaultdict(list)
        for record in records:
            by_height[record.height].append(UtxoDetail(id=record.index, amount=record.amount))
        return by_height

    def merge_group(self, group: HeightGroup, utxos: list[UtxoDetail]) -> MergedActivity:
        message, change_amount = describe_amount(group.amount)
        activity: MergedActivity = MergedActivity(
            height=group.height,
            amount=group.amount,
            message=message,
            change_amount=change_amount,
            timestamp=group.timestamp,
            index=group.index,
            txid=group.txid or None,
            release_date=group.release_date,
            utxos=list(utxos),
        )

        match self.lookup.find(group.txid):
            case LocalTxMetadata() as meta:
                activity.fee = meta.fee
                activity.priority_fee = meta.priority_fee
                activity.form = meta.address
                activity.outputs = meta.outputs
                activity.batch_output = meta.batch_output
            case None:
                pass
        return activity

    def merge(
        self, groups: Sequence[HeightGroup], records: Sequence[RawLedgerRecord]
    ) -> list[MergedActivity]:
        utxos: dict[int, list[UtxoDetail]] = self._utxos_by_height(records)
        merged: list[MergedActivity] = [
            self.merge_group(group, utxos.get(group.height, [])) for group in groups
        ]
        enriched: int = sum(1 for m in merged if m.fee is not None)
        logger.debug("Merged height groups", groups=len(merged), enriched=enriched)
        return merged
