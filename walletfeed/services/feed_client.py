"""HTTP client for the wallet server's history endpoints."""

from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from config import get_settings
from walletfeed.services.errors import (
    FeedConnectionError,
    FeedResponseError,
    MalformedRecordError,
)
from walletfeed.services.schemas.ledger import RawLedgerRecord, UtxoItem
from walletfeed.services.schemas.wire import RawLedgerRecordIn, UtxoItemIn

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

HISTORY_PATH = "/rpc/wallet/history"
AVAILABLE_UTXOS_PATH = "/rpc/wallet/avaliable_utxos"


class RemoteLedgerFeed:
    """Fetches raw per-output records from a wallet server.

    ``server_url`` is chosen per call so one feed can serve several wallets.
    No retries: a failed request surfaces immediately as a ``FeedError``.
    """

    def __init__(
        self,
        timeout: float | None = None,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.timeout: float = timeout or settings.feed.timeout
        self.token: str | None = token if token is not None else settings.feed.token
        self._transport: httpx.AsyncBaseTransport | None = transport

    def _headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def _get_json(self, server_url: str, path: str) -> list[Any]:
        url: str = server_url.rstrip("/") + path
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers=self._headers(),
                transport=self._transport,
            ) as client:
                res: httpx.Response = await client.get(url)
        except httpx.TransportError as e:
            raise FeedConnectionError(f"Cannot reach {url}: {e}") from e

        if res.status_code >= 400:
            raise FeedResponseError(f"{url} returned HTTP {res.status_code}")
        try:
            body: Any = res.json()
        except ValueError as e:
            raise FeedResponseError(f"{url} returned a non-JSON body") from e
        if body is None:
            return []
        if not isinstance(body, list):
            raise FeedResponseError(f"{url} returned {type(body).__name__}, expected a list")
        return body

    async def fetch(self, server_url: str) -> list[RawLedgerRecord]:
        payload: list[Any] = await self._get_json(server_url, HISTORY_PATH)
        records: list[RawLedgerRecord] = []
        for position, item in enumerate(payload):
            try:
                records.append(RawLedgerRecordIn.model_validate(item).to_record())
            except ValidationError as e:
                raise MalformedRecordError(f"History record #{position} is malformed: {e}") from e
        logger.info("Fetched ledger history", server_url=server_url, records=len(records))
        return records

    async def fetch_available_utxos(self, server_url: str) -> list[UtxoItem]:
        payload: list[Any] = await self._get_json(server_url, AVAILABLE_UTXOS_PATH)
        items: list[UtxoItem] = []
        for position, item in enumerate(payload):
            try:
                items.append(UtxoItemIn.model_validate(item).to_item())
            except ValidationError as e:
                raise MalformedRecordError(f"UTXO #{position} is malformed: {e}") from e
        logger.info("Fetched available utxos", server_url=server_url, utxos=len(items))
        return items
