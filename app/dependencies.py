"""FastAPI dependencies: DB sessions, services and auth."""

from functools import lru_cache

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from config import get_settings
from db.connection import get_db
from walletfeed.services.activity import ActivityService
from walletfeed.services.feed_client import RemoteLedgerFeed
from walletfeed.services.local_history import LocalHistoryStore
from walletfeed.services.schemas.results import ActivityResult
from walletfeed.services.state import ActivitySnapshot


def get_api_key(x_api_key: str = Header(default="")) -> str:
    """Validate API key on mutation endpoints."""
    expected: str | None = get_settings().api_key
    if not expected:
        return ""  # auth disabled when no key configured
    if x_api_key != expected:
        raise HTTPException(status_code=401, detail="Invalid or missing API key")
    return x_api_key


def get_feed() -> RemoteLedgerFeed:
    return RemoteLedgerFeed()


def get_history_store(db: Session = Depends(get_db)) -> LocalHistoryStore:
    return LocalHistoryStore(db)


def get_activity_service(
    feed: RemoteLedgerFeed = Depends(get_feed),
    store: LocalHistoryStore = Depends(get_history_store),
) -> ActivityService:
    return ActivityService(feed, store)


@lru_cache
def get_activity_snapshot() -> ActivitySnapshot[ActivityResult]:
    """Process-wide last-result container for the activity feed."""
    return ActivitySnapshot(name="activity")
