"""Activity feed request/response schemas."""

from typing import Any

from pydantic import Field

from app.schemas.common import CamelModel


class UtxoDetailResponse(CamelModel):
    id: int
    amount: str


class ActivityResponse(CamelModel):
    txid: str | None
    fee: str | None
    priority_fee: str | None
    form: str | None
    outputs: list[Any] | None
    batch_output: Any = None
    message: str
    change_amount: str
    amount: str
    direction: str
    timestamp: int
    height: int
    index: int
    release_date: Any = None
    utxos: list[UtxoDetailResponse]


class ActivityListResponse(CamelModel):
    account_id: int
    history_type: str
    local_history_available: bool
    warnings: list[str]
    items: list[ActivityResponse]


class ActivitySnapshotResponse(CamelModel):
    loading: bool
    error: str | None
    result: ActivityListResponse | None


class DailyBucketResponse(CamelModel):
    period_start_height: int
    period_end_height: int
    period_label: str
    received_total: str
    sent_total: str
    summary: str


class DailyActivityResponse(CamelModel):
    account_id: int
    period_type: str
    buckets: list[DailyBucketResponse]
    series: dict[str, list[Any]]


class UtxoItemResponse(CamelModel):
    id: int
    amount: str
    locked: bool
    height: int | None
    timestamp: int | None
    release_date: Any = None


class ExecutionRecordCreate(CamelModel):
    account_id: int = Field(..., ge=0)
    txid: str = Field(..., min_length=1)
    fee: str = Field("0")
    priority_fee: str = Field("0")
    address: str = Field("")
    outputs: list[Any] = Field(default_factory=list)
    batch_output: Any = None


class ExecutionRecordResponse(CamelModel):
    txid: str
    fee: str
    priority_fee: str
    address: str
    outputs: list[Any]
    batch_output: Any = None
