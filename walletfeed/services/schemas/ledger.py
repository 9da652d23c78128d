"""Ledger and activity data transfer objects."""

from dataclasses import dataclass, field
from decimal import Decimal

from db.enums import Direction


@dataclass(frozen=True)
class RawLedgerRecord:
    """One output touched at one block height, as reported by the wallet server."""

    height: int
    index: int
    amount: str
    timestamp: int
    txid: str | None = None
    release_date: object | None = None


@dataclass(frozen=True)
class LocalTxMetadata:
    txid: str
    fee: str
    priority_fee: str
    address: str
    outputs: list[object] = field(default_factory=list)
    batch_output: object | None = None


@dataclass
class HeightGroup:
    height: int
    amount: str
    txid: str | None
    # Carried from the first record seen at this height.
    timestamp: int
    index: int
    release_date: object | None = None


@dataclass(frozen=True)
class UtxoDetail:
    id: int
    amount: str


@dataclass
class MergedActivity:
    height: int
    amount: str
    message: str
    change_amount: str
    timestamp: int
    index: int
    txid: str | None = None
    fee: str | None = None
    priority_fee: str | None = None
    form: str | None = None
    outputs: list[object] | None = None
    batch_output: object | None = None
    release_date: object | None = None
    utxos: list[UtxoDetail] = field(default_factory=list)

    @property
    def direction(self) -> Direction:
        return Direction.SEND if self.change_amount.startswith("-") else Direction.RECEIVE


@dataclass
class DailyBucket:
    period_start_height: int
    period_end_height: int
    period_label: str
    received_total: Decimal = Decimal(0)
    sent_total: Decimal = Decimal(0)


@dataclass(frozen=True)
class UtxoItem:
    id: int
    amount: str
    locked: bool = False
    height: int | None = None
    timestamp: int | None = None
    release_date: object | None = None
