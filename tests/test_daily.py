"""Tests for walletfeed.services.daily."""

from datetime import timedelta, timezone
from decimal import Decimal

from fakes import DAY_MS, JAN_15_MS, rec

from db.enums import PeriodType
from walletfeed.services.activity import build_activity
from walletfeed.services.daily import (
    aggregate_periods,
    chart_series,
    format_summary_line,
    period_of,
)
from walletfeed.services.schemas.ledger import DailyBucket, MergedActivity


def _activities() -> list[MergedActivity]:
    return build_activity(
        [
            rec(1000, 0, "50", timestamp=JAN_15_MS + 1_000),
            rec(1001, 0, "-20", "a", timestamp=JAN_15_MS + 3_600_000),
            rec(1002, 0, "2.5", timestamp=JAN_15_MS + 7_200_000),
            rec(1100, 0, "-1000000", "b", timestamp=JAN_15_MS + DAY_MS),
            rec(1101, 0, "1234567.125", timestamp=JAN_15_MS + DAY_MS + 5),
        ]
    )


class TestPeriodOf:
    def test_daily_label(self) -> None:
        assert period_of(JAN_15_MS)[1] == "2026-01-15"

    def test_monthly_label(self) -> None:
        assert period_of(JAN_15_MS, PeriodType.MONTHLY)[1] == "2026-01"

    def test_seconds_unit(self) -> None:
        assert period_of(JAN_15_MS // 1000, timestamp_unit="s")[1] == "2026-01-15"

    def test_timezone_shifts_day(self) -> None:
        tz = timezone(timedelta(hours=-5))
        assert period_of(JAN_15_MS, tz=tz)[1] == "2026-01-14"


class TestAggregatePeriods:
    def test_daily_buckets(self) -> None:
        buckets: list[DailyBucket] = aggregate_periods(_activities())
        assert [b.period_label for b in buckets] == ["2026-01-15", "2026-01-16"]

        first, second = buckets
        assert first.received_total == Decimal("52.5")
        assert first.sent_total == Decimal("20")
        assert (first.period_start_height, first.period_end_height) == (1000, 1002)
        assert second.received_total == Decimal("1234567.125")
        assert second.sent_total == Decimal("1000000")
        assert (second.period_start_height, second.period_end_height) == (1100, 1101)

    def test_chronological_even_though_feed_is_newest_first(self) -> None:
        activities = _activities()
        assert activities[0].height == 1101
        labels = [b.period_label for b in aggregate_periods(activities)]
        assert labels == sorted(labels)

    def test_monthly_single_bucket(self) -> None:
        buckets = aggregate_periods(_activities(), PeriodType.MONTHLY)
        assert len(buckets) == 1
        assert buckets[0].received_total == Decimal("1234619.625")
        assert buckets[0].sent_total == Decimal("1000020")

    def test_totals_match_feed(self) -> None:
        activities = _activities()
        buckets = aggregate_periods(activities)
        net = sum((b.received_total - b.sent_total for b in buckets), Decimal(0))
        assert net == sum((Decimal(a.amount) for a in activities), Decimal(0))

    def test_wide_amounts_are_not_rounded(self) -> None:
        wide: str = "3" * 110
        activities = build_activity(
            [
                rec(5, 0, wide, timestamp=JAN_15_MS),
                rec(6, 0, "0.001", timestamp=JAN_15_MS + 10),
                rec(7, 0, "-" + wide, "s", timestamp=JAN_15_MS + 20),
            ]
        )
        (bucket,) = aggregate_periods(activities)
        assert bucket.received_total == Decimal(wide + ".001")
        assert bucket.sent_total == Decimal(wide)

    def test_empty(self) -> None:
        assert aggregate_periods([]) == []


class TestPresentation:
    def test_chart_series(self) -> None:
        series = chart_series(aggregate_periods(_activities()))
        assert series["labels"] == ["2026-01-15", "2026-01-16"]
        assert series["Received"] == [Decimal("52.5"), Decimal("1234567.125")]
        assert series["Spent"] == [Decimal("20"), Decimal("1000000")]

    def test_summary_line(self) -> None:
        bucket = DailyBucket(
            period_start_height=12000,
            period_end_height=12345,
            period_label="2026-01-16",
            received_total=Decimal("1234567.1250"),
            sent_total=Decimal("1000000"),
        )
        assert format_summary_line(bucket) == (
            "Receive: 1,234,567.125 Send: 1,000,000 Height: (12,000 - 12,345) 2026-01-16"
        )
