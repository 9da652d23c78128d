"""Tests for walletfeed.services.merger."""

from fakes import meta, rec

from db.enums import Direction
from walletfeed.services.grouping import group_by_height
from walletfeed.services.merger import HistoryMerger, describe_amount
from walletfeed.services.schemas.ledger import MergedActivity, RawLedgerRecord, UtxoDetail
from walletfeed.services.schemas.results import LocalHistoryLookup


def _merge(
    records: list[RawLedgerRecord], lookup: LocalHistoryLookup | None = None
) -> list[MergedActivity]:
    return HistoryMerger(lookup).merge(group_by_height(records), records)


class TestDescribeAmount:
    def test_receive(self) -> None:
        assert describe_amount("30") == ("Received 30", "+ 30")

    def test_send(self) -> None:
        assert describe_amount("-12.50") == ("Sent 12.5", "- 12.5")

    def test_zero_is_receive(self) -> None:
        assert describe_amount("0") == ("Received 0", "+ 0")


class TestMerge:
    def test_example_batch(self) -> None:
        merged = _merge([rec(100, 0, "50", ""), rec(100, 1, "-20", "abc")])
        assert len(merged) == 1
        m: MergedActivity = merged[0]
        assert m.message == "Received 30"
        assert m.change_amount == "+ 30"
        assert m.height == 100
        assert m.txid == "abc"
        assert m.utxos == [UtxoDetail(id=0, amount="50"), UtxoDetail(id=1, amount="-20")]
        assert m.direction == Direction.RECEIVE

    def test_send_direction(self) -> None:
        m = _merge([rec(5, 0, "-7")])[0]
        assert m.message == "Sent 7"
        assert m.change_amount == "- 7"
        assert m.direction == Direction.SEND

    def test_one_activity_per_height(self) -> None:
        records = [rec(1, 0, "1"), rec(2, 0, "2"), rec(1, 1, "3"), rec(3, 0, "-4")]
        merged = _merge(records)
        assert [m.height for m in merged] == [1, 2, 3]
        assert [len(m.utxos) for m in merged] == [2, 1, 1]

    def test_message_and_sign_agree(self) -> None:
        records = [rec(h, 0, amt) for h, amt in enumerate(["1", "-1", "0", "-0.0001", "9e2"])]
        for m in _merge(records):
            received = m.message.startswith("Received")
            assert received == m.change_amount.startswith("+")
            assert received == (not m.amount.startswith("-"))


class TestMetadataEnrichment:
    def test_copies_local_fields(self) -> None:
        lookup = LocalHistoryLookup.from_entries([meta("abc", fee="0.5")])
        m = _merge([rec(100, 0, "-20", "abc")], lookup)[0]
        assert m.fee == "0.5"
        assert m.priority_fee == "0.001"
        assert m.form == "nolgam1sender"
        assert m.outputs == [{"address": "nolgam1recipient", "amount": "20"}]
        assert m.batch_output is None

    def test_unknown_txid_leaves_fields_unset(self) -> None:
        lookup = LocalHistoryLookup.from_entries([meta("other")])
        m = _merge([rec(100, 0, "-20", "abc")], lookup)[0]
        assert m.txid == "abc"
        assert m.fee is None
        assert m.form is None
        assert m.outputs is None

    def test_no_txid_skips_lookup(self) -> None:
        lookup = LocalHistoryLookup.from_entries([meta("abc")])
        m = _merge([rec(100, 0, "5", "")], lookup)[0]
        assert m.txid is None
        assert m.fee is None

    def test_unavailable_lookup_degrades(self) -> None:
        lookup = LocalHistoryLookup.unavailable("database is locked")
        m = _merge([rec(100, 0, "50"), rec(100, 1, "-20", "abc")], lookup)[0]
        assert m.message == "Received 30"
        assert m.change_amount == "+ 30"
        assert len(m.utxos) == 2
        assert m.fee is None
        assert m.form is None
        assert m.outputs is None
