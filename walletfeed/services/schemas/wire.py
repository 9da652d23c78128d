"""Wire-format models for payloads returned by the wallet server.

Validation happens here, at the ingestion boundary, so a malformed record never
reaches the amount arithmetic. Integer fields are strict: booleans, numeric strings
and floats are rejected rather than coerced.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictBool, StrictInt, StrictStr, field_validator

from walletfeed.services.schemas.ledger import RawLedgerRecord, UtxoItem


def _decimal_string(value: object) -> str:
    if isinstance(value, bool) or value is None:
        raise ValueError("amount must be a decimal number")
    if isinstance(value, float):
        # Floats have already lost precision; keep their shortest repr.
        value = repr(value)
    raw: str = str(value).strip()
    try:
        parsed: Decimal = Decimal(raw)
    except InvalidOperation as e:
        raise ValueError(f"amount '{raw}' is not a decimal number") from e
    if not parsed.is_finite():
        raise ValueError(f"amount '{raw}' is not finite")
    return raw


class RawLedgerRecordIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    height: StrictInt
    index: StrictInt
    amount: str
    timestamp: StrictInt
    txid: StrictStr | None = None
    release_date: Any = None

    @field_validator("amount", mode="before")
    @classmethod
    def _check_amount(cls, value: object) -> str:
        return _decimal_string(value)

    def to_record(self) -> RawLedgerRecord:
        return RawLedgerRecord(
            height=self.height,
            index=self.index,
            amount=self.amount,
            timestamp=self.timestamp,
            txid=self.txid or None,
            release_date=self.release_date,
        )


class UtxoItemIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: StrictInt
    amount: str
    locked: StrictBool = False
    height: StrictInt | None = None
    timestamp: StrictInt | None = None
    release_date: Any = None

    @field_validator("amount", mode="before")
    @classmethod
    def _check_amount(cls, value: object) -> str:
        return _decimal_string(value)

    def to_item(self) -> UtxoItem:
        return UtxoItem(
            id=self.id,
            amount=self.amount,
            locked=self.locked,
            height=self.height,
            timestamp=self.timestamp,
            release_date=self.release_date,
        )
