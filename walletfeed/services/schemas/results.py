"""Result dataclasses returned by service operations."""

from dataclasses import dataclass, field

from db.enums import HistoryType
from walletfeed.services.schemas.ledger import LocalTxMetadata, MergedActivity


@dataclass
class LocalHistoryLookup:
    """Local execution history for one account, indexed by txid.

    ``available`` is False when the store could not be read; the lookup is then
    empty and every ``find`` returns None.
    """

    entries: dict[str, LocalTxMetadata] = field(default_factory=dict)
    available: bool = True
    error: str | None = None

    @classmethod
    def from_entries(cls, entries: list[LocalTxMetadata]) -> "LocalHistoryLookup":
        return cls(entries={e.txid: e for e in entries if e.txid})

    @classmethod
    def unavailable(cls, error: str) -> "LocalHistoryLookup":
        return cls(entries={}, available=False, error=error)

    def find(self, txid: str | None) -> LocalTxMetadata | None:
        if not txid:
            return None
        return self.entries.get(txid)


@dataclass
class ActivityResult:
    account_id: int
    history_type: HistoryType
    activities: list[MergedActivity]
    local_history_available: bool
    warnings: list[str] = field(default_factory=list)
