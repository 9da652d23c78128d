"""Activity feed endpoints: thin routes, logic in services."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from app.dependencies import (
    get_activity_service,
    get_activity_snapshot,
    get_api_key,
    get_history_store,
)
from app.schemas.activity import (
    ActivityListResponse,
    ActivitySnapshotResponse,
    DailyActivityResponse,
    ExecutionRecordCreate,
    ExecutionRecordResponse,
)
from config import get_settings
from db.enums import HistoryType, PeriodType
from walletfeed.services._types import activity_to_dict, bucket_to_dict
from walletfeed.services.activity import ActivityService
from walletfeed.services.daily import aggregate_periods, chart_series, format_summary_line
from walletfeed.services.errors import FeedError, LocalStoreError
from walletfeed.services.local_history import LocalHistoryStore
from walletfeed.services.schemas.results import ActivityResult
from walletfeed.services.state import ActivitySnapshot

router = APIRouter(prefix="/api", tags=["activity"])


def _result_payload(result: ActivityResult) -> dict[str, Any]:
    return {
        "account_id": result.account_id,
        "history_type": result.history_type.value,
        "local_history_available": result.local_history_available,
        "warnings": result.warnings,
        "items": [activity_to_dict(a) for a in result.activities],
    }


async def _query(
    service: ActivityService,
    server_url: str | None,
    account_id: int,
    history_type: HistoryType,
) -> ActivityResult:
    try:
        return await service.query_activity(
            server_url or get_settings().feed.server_url,
            account_id,
            history_type,
        )
    except FeedError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.get("/activity", response_model=ActivityListResponse)
async def list_activity(
    account_id: int = Query(..., alias="accountId"),
    history_type: str = Query(HistoryType.ALL.value, alias="historyType"),
    server_url: str | None = Query(None, alias="serverUrl"),
    service: ActivityService = Depends(get_activity_service),
    snapshot: ActivitySnapshot[ActivityResult] = Depends(get_activity_snapshot),
) -> dict[str, Any]:
    try:
        kind: HistoryType = HistoryType.parse(history_type)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    token: int = snapshot.begin()
    try:
        result: ActivityResult = await _query(service, server_url, account_id, kind)
    except HTTPException as e:
        snapshot.fail(token, str(e.detail))
        raise
    snapshot.complete(token, result)
    return _result_payload(result)


@router.get("/activity/latest", response_model=ActivitySnapshotResponse)
def latest_activity(
    snapshot: ActivitySnapshot[ActivityResult] = Depends(get_activity_snapshot),
) -> dict[str, Any]:
    current = snapshot.current
    return {
        "loading": current.loading,
        "error": current.error,
        "result": _result_payload(current.value) if current.value else None,
    }


@router.get("/activity/daily", response_model=DailyActivityResponse)
async def daily_activity(
    account_id: int = Query(..., alias="accountId"),
    period_type: PeriodType = Query(PeriodType.DAILY, alias="periodType"),
    server_url: str | None = Query(None, alias="serverUrl"),
    service: ActivityService = Depends(get_activity_service),
) -> dict[str, Any]:
    """Period totals over the unfiltered feed; the shared snapshot is left untouched."""
    result = await _query(service, server_url, account_id, HistoryType.ALL)
    buckets = aggregate_periods(
        result.activities,
        period_type,
        timestamp_unit=get_settings().feed.timestamp_unit,
    )
    series = chart_series(buckets)
    return {
        "account_id": account_id,
        "period_type": period_type.value,
        "buckets": [bucket_to_dict(b, format_summary_line(b)) for b in buckets],
        "series": {name: [str(v) for v in values] for name, values in series.items()},
    }


@router.post("/history", response_model=ExecutionRecordResponse)
def record_execution(
    body: ExecutionRecordCreate,
    store: LocalHistoryStore = Depends(get_history_store),
    _key: str = Depends(get_api_key),
) -> dict[str, Any]:
    try:
        meta = store.record(
            body.account_id,
            body.txid,
            fee=body.fee,
            priority_fee=body.priority_fee,
            address=body.address,
            outputs=body.outputs,
            batch_output=body.batch_output,
        )
    except LocalStoreError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "txid": meta.txid,
        "fee": meta.fee,
        "priority_fee": meta.priority_fee,
        "address": meta.address,
        "outputs": meta.outputs,
        "batch_output": meta.batch_output,
    }
