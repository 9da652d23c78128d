"""Typed dicts for service-layer return values.

Keeps route-facing methods explicit about their shape instead of returning bare dicts.
"""

import sys

if sys.version_info >= (3, 12):
    from typing import TypedDict
else:
    from typing_extensions import TypedDict

from walletfeed.services.amounts import to_plain
from walletfeed.services.schemas.ledger import DailyBucket, MergedActivity, UtxoItem

# -- Activity --------------------------------------------------------------


class UtxoDetailDict(TypedDict):
    id: int
    amount: str


class ActivityDict(TypedDict):
    txid: str | None
    fee: str | None
    priority_fee: str | None
    form: str | None
    outputs: list[object] | None
    batch_output: object | None
    message: str
    change_amount: str
    amount: str
    direction: str
    timestamp: int
    height: int
    index: int
    release_date: object | None
    utxos: list[UtxoDetailDict]


def activity_to_dict(activity: MergedActivity) -> ActivityDict:
    return ActivityDict(
        txid=activity.txid,
        fee=activity.fee,
        priority_fee=activity.priority_fee,
        form=activity.form,
        outputs=activity.outputs,
        batch_output=activity.batch_output,
        message=activity.message,
        change_amount=activity.change_amount,
        amount=activity.amount,
        direction=activity.direction.value,
        timestamp=activity.timestamp,
        height=activity.height,
        index=activity.index,
        release_date=activity.release_date,
        utxos=[UtxoDetailDict(id=u.id, amount=u.amount) for u in activity.utxos],
    )


# -- Daily buckets ---------------------------------------------------------


class DailyBucketDict(TypedDict):
    period_start_height: int
    period_end_height: int
    period_label: str
    received_total: str
    sent_total: str
    summary: str


# -- UTXOs -----------------------------------------------------------------


class UtxoItemDict(TypedDict):
    id: int
    amount: str
    locked: bool
    height: int | None
    timestamp: int | None
    release_date: object | None


def utxo_to_dict(item: UtxoItem) -> UtxoItemDict:
    return UtxoItemDict(
        id=item.id,
        amount=item.amount,
        locked=item.locked,
        height=item.height,
        timestamp=item.timestamp,
        release_date=item.release_date,
    )


def bucket_to_dict(bucket: DailyBucket, summary: str) -> DailyBucketDict:
    return DailyBucketDict(
        period_start_height=bucket.period_start_height,
        period_end_height=bucket.period_end_height,
        period_label=bucket.period_label,
        received_total=to_plain(bucket.received_total),
        sent_total=to_plain(bucket.sent_total),
        summary=summary,
    )
