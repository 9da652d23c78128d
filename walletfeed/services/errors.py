"""Shared exception hierarchy for walletfeed services."""

# ── Remote feed ───────────────────────────────────────────────────────────────


class FeedError(Exception):
    """Base exception for remote ledger feed errors."""


class FeedConnectionError(FeedError):
    """Cannot reach the wallet server."""


class FeedResponseError(FeedError):
    """Wallet server answered with an error status or an unreadable body."""


class MalformedRecordError(FeedError):
    """A fetched record is missing required fields or carries invalid values."""


# ── Local history ─────────────────────────────────────────────────────────────


class LocalStoreError(Exception):
    """Reading or writing the local execution history failed."""


# ── Amounts ───────────────────────────────────────────────────────────────────


class InvalidAmountError(ValueError):
    """Amount string is not a finite decimal number."""
