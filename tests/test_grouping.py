"""Tests for walletfeed.services.grouping."""

from fakes import rec

from walletfeed.services.amounts import sum_amounts, to_decimal
from walletfeed.services.grouping import group_by_height
from walletfeed.services.schemas.ledger import HeightGroup, RawLedgerRecord


class TestGroupByHeight:
    def test_example_batch(self) -> None:
        groups: list[HeightGroup] = group_by_height(
            [rec(100, 0, "50", ""), rec(100, 1, "-20", "abc")]
        )
        assert len(groups) == 1
        assert groups[0].height == 100
        assert groups[0].amount == "30"
        assert groups[0].txid == "abc"

    def test_empty(self) -> None:
        assert group_by_height([]) == []

    def test_first_encounter_order(self) -> None:
        records: list[RawLedgerRecord] = [
            rec(300, 0, "1"),
            rec(100, 0, "2"),
            rec(300, 1, "3"),
            rec(200, 0, "4"),
        ]
        assert [g.height for g in group_by_height(records)] == [300, 100, 200]

    def test_heights_unique_and_complete(self) -> None:
        records: list[RawLedgerRecord] = [
            rec(h, i, str(i)) for i, h in enumerate([5, 7, 5, 9, 7, 7, 11])
        ]
        heights: list[int] = [g.height for g in group_by_height(records)]
        assert len(heights) == len(set(heights))
        assert set(heights) == {r.height for r in records}

    def test_global_sum_conserved(self) -> None:
        records: list[RawLedgerRecord] = [
            rec(1, 0, "1000000000000000000000.1"),
            rec(1, 1, "-0.2"),
            rec(2, 0, "0.3"),
            rec(3, 0, "-999999999999999999999.9"),
            rec(2, 1, "0.000000000000000001"),
        ]
        grouped: str = sum_amounts([g.amount for g in group_by_height(records)])
        raw: str = sum_amounts([r.amount for r in records])
        assert to_decimal(grouped) == to_decimal(raw)

    def test_repeated_runs_identical(self) -> None:
        records: list[RawLedgerRecord] = [rec(1, i, "0.1") for i in range(10)]
        first: list[HeightGroup] = group_by_height(records)
        second: list[HeightGroup] = group_by_height(records)
        assert first == second
        assert first[0].amount == "1.0"

    def test_input_not_mutated(self) -> None:
        records: list[RawLedgerRecord] = [rec(1, 0, "5", "a"), rec(1, 1, "6")]
        group_by_height(records)
        assert records[0].amount == "5"
        assert records[1].txid is None

    def test_representative_fields_from_first_record(self) -> None:
        groups = group_by_height([rec(1, 4, "5", timestamp=99), rec(1, 2, "6", timestamp=100)])
        assert groups[0].index == 4
        assert groups[0].timestamp == 99


class TestTxidTieBreak:
    def test_last_non_empty_txid_wins(self) -> None:
        groups = group_by_height([rec(1, 0, "1", "first"), rec(1, 1, "1", "second")])
        assert groups[0].txid == "second"

    def test_empty_txid_never_overwrites(self) -> None:
        groups = group_by_height(
            [rec(1, 0, "1", "keep"), rec(1, 1, "1", ""), rec(1, 2, "1", None)]
        )
        assert groups[0].txid == "keep"

    def test_no_txid_at_all(self) -> None:
        groups = group_by_height([rec(1, 0, "1", ""), rec(1, 1, "1")])
        assert groups[0].txid is None
