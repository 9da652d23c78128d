"""Shared dataclasses for walletfeed services."""

from walletfeed.services.schemas.ledger import (
    DailyBucket,
    HeightGroup,
    LocalTxMetadata,
    MergedActivity,
    RawLedgerRecord,
    UtxoDetail,
    UtxoItem,
)
from walletfeed.services.schemas.results import ActivityResult, LocalHistoryLookup

__all__ = [
    # Ledger schemas
    "DailyBucket",
    "HeightGroup",
    "LocalTxMetadata",
    "MergedActivity",
    "RawLedgerRecord",
    "UtxoDetail",
    "UtxoItem",
    # Result schemas
    "ActivityResult",
    "LocalHistoryLookup",
]
