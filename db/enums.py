"""Enumeration types for the wallet activity feed."""

from enum import Enum


class HistoryType(str, Enum):
    """Which side of the feed a query keeps."""

    ALL = "All"
    SEND = "Send"
    RECEIVE = "Receive"

    @classmethod
    def parse(cls, raw: "HistoryType | str | None") -> "HistoryType":
        if raw is None:
            return cls.ALL
        if isinstance(raw, cls):
            return raw
        for member in cls:
            if member.value.lower() == str(raw).strip().lower():
                return member
        raise ValueError(f"Unknown history type '{raw}'. Expected All, Send or Receive")


class Direction(str, Enum):
    """Direction of a merged activity, derived from the sign of its amount."""

    RECEIVE = "receive"
    SEND = "send"


class PeriodType(str, Enum):
    """Bucketing period for charted totals."""

    DAILY = "daily"
    MONTHLY = "monthly"


class UtxoSortType(str, Enum):
    """Ordering for the available-UTXO list."""

    AMOUNT = "Amount"
    ID = "ID"


class Section(str, Enum):
    """History page section selector."""

    ACTIVITY = "activity"
    UTXOS = "utxos"
