"""Available UTXO endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query

from app.dependencies import get_activity_service
from app.schemas.activity import UtxoItemResponse
from config import get_settings
from db.enums import UtxoSortType
from walletfeed.services._types import UtxoItemDict, utxo_to_dict
from walletfeed.services.activity import ActivityService
from walletfeed.services.errors import FeedError

router = APIRouter(prefix="/api", tags=["utxos"])


@router.get("/utxos", response_model=list[UtxoItemResponse])
async def list_available_utxos(
    sort_type: UtxoSortType = Query(UtxoSortType.AMOUNT, alias="sortType"),
    contain_locked: bool = Query(False, alias="containLocked"),
    server_url: str | None = Query(None, alias="serverUrl"),
    service: ActivityService = Depends(get_activity_service),
) -> list[UtxoItemDict]:
    try:
        items = await service.query_available_utxos(
            server_url or get_settings().feed.server_url,
            sort_type,
            contain_locked,
        )
    except FeedError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return [utxo_to_dict(i) for i in items]
