"""Collapse per-output ledger records into one group per block height."""

from collections.abc import Sequence

from walletfeed.services.amounts import add
from walletfeed.services.schemas.ledger import HeightGroup, RawLedgerRecord


def group_by_height(records: Sequence[RawLedgerRecord]) -> list[HeightGroup]:
    """Sum amounts per height, keeping first-encounter order of heights.

    The last non-empty txid seen at a height wins; records without a txid never
    clear one already set.
    """
    groups: dict[int, HeightGroup] = {}
    for record in records:
        group: HeightGroup | None = groups.get(record.height)
        if group is None:
            groups[record.height] = HeightGroup(
                height=record.height,
                amount=add("0", record.amount),
                txid=record.txid or None,
                timestamp=record.timestamp,
                index=record.index,
                release_date=record.release_date,
            )
            continue
        group.amount = add(group.amount, record.amount)
        if record.txid:
            group.txid = record.txid
    return list(groups.values())
