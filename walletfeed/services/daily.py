"""Per-period send/receive totals derived from the activity feed."""

from collections.abc import Sequence
from datetime import UTC, date, datetime, tzinfo
from decimal import Decimal
from typing import Literal

from db.enums import PeriodType
from walletfeed.services.amounts import (
    add_exact,
    is_negative,
    positive_fixed,
    to_decimal,
    to_plain,
)
from walletfeed.services.schemas.ledger import DailyBucket, MergedActivity

TimestampUnit = Literal["s", "ms"]


def period_of(
    timestamp: int,
    period_type: PeriodType = PeriodType.DAILY,
    tz: tzinfo = UTC,
    timestamp_unit: TimestampUnit = "ms",
) -> tuple[date, str]:
    """Return ``(period_start, label)`` for a ledger timestamp."""
    seconds: float = timestamp / 1000 if timestamp_unit == "ms" else float(timestamp)
    day: date = datetime.fromtimestamp(seconds, tz=tz).date()
    if period_type == PeriodType.MONTHLY:
        start: date = day.replace(day=1)
        return start, start.strftime("%Y-%m")
    return day, day.isoformat()


def aggregate_periods(
    activities: Sequence[MergedActivity],
    period_type: PeriodType = PeriodType.DAILY,
    tz: tzinfo = UTC,
    timestamp_unit: TimestampUnit = "ms",
) -> list[DailyBucket]:
    """Bucket activities by calendar period, oldest period first.

    ``sent_total`` holds the magnitude of everything sent in the period, so both
    series are non-negative.
    """
    buckets: dict[date, DailyBucket] = {}
    for activity in activities:
        start, label = period_of(activity.timestamp, period_type, tz, timestamp_unit)
        bucket: DailyBucket | None = buckets.get(start)
        if bucket is None:
            bucket = DailyBucket(
                period_start_height=activity.height,
                period_end_height=activity.height,
                period_label=label,
            )
            buckets[start] = bucket
        else:
            bucket.period_start_height = min(bucket.period_start_height, activity.height)
            bucket.period_end_height = max(bucket.period_end_height, activity.height)

        value: Decimal = to_decimal(activity.amount)
        if is_negative(activity.amount):
            bucket.sent_total = add_exact(bucket.sent_total, value.copy_abs())
        else:
            bucket.received_total = add_exact(bucket.received_total, value)
    return [buckets[k] for k in sorted(buckets)]


def chart_series(buckets: Sequence[DailyBucket]) -> dict[str, list[object]]:
    """Two named series for a received-vs-spent chart, plus their labels."""
    return {
        "labels": [b.period_label for b in buckets],
        "Received": [b.received_total for b in buckets],
        "Spent": [b.sent_total for b in buckets],
    }


def _with_separators(amount: Decimal) -> str:
    text: str = positive_fixed(to_plain(amount))
    whole, _, fraction = text.partition(".")
    grouped: str = f"{int(whole):,}"
    return f"{grouped}.{fraction}" if fraction else grouped


def format_summary_line(bucket: DailyBucket) -> str:
    return (
        f"Receive: {_with_separators(bucket.received_total)} "
        f"Send: {_with_separators(bucket.sent_total)} "
        f"Height: ({bucket.period_start_height:,} - {bucket.period_end_height:,}) "
        f"{bucket.period_label}"
    )
