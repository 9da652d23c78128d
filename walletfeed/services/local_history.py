"""Local execution history: transactions this wallet built and broadcast."""

import asyncio
from collections.abc import Sequence

import structlog
from sqlalchemy import Select, and_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.models import ExecutionHistory
from walletfeed.services._helpers import dump_json, load_json, now_iso
from walletfeed.services.errors import LocalStoreError
from walletfeed.services.schemas.ledger import LocalTxMetadata

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def _to_metadata(row: ExecutionHistory) -> LocalTxMetadata:
    outputs: object = load_json(row.outputs)
    return LocalTxMetadata(
        txid=row.txid,
        fee=row.fee,
        priority_fee=row.priority_fee,
        address=row.address,
        outputs=list(outputs) if isinstance(outputs, list) else [],
        batch_output=load_json(row.batch_output),
    )


class LocalHistoryStore:
    """SQLAlchemy-backed store of local transaction metadata, scoped per account."""

    def __init__(self, session: Session) -> None:
        self.session: Session = session

    async def get(self, account_id: int) -> list[LocalTxMetadata]:
        """Read an account's entries off the event loop."""
        return await asyncio.to_thread(self._read, account_id)

    def _read(self, account_id: int) -> list[LocalTxMetadata]:
        stmt: Select[tuple[ExecutionHistory]] = (
            select(ExecutionHistory)
            .where(ExecutionHistory.address_id == account_id)
            .order_by(ExecutionHistory.id)
        )
        try:
            rows: Sequence[ExecutionHistory] = self.session.scalars(stmt).all()
        except SQLAlchemyError as e:
            raise LocalStoreError(f"Could not read execution history: {e}") from e
        return [_to_metadata(r) for r in rows]

    def record(
        self,
        account_id: int,
        txid: str,
        fee: str = "0",
        priority_fee: str = "0",
        address: str = "",
        outputs: list[object] | None = None,
        batch_output: dict[str, object] | list[object] | None = None,
    ) -> LocalTxMetadata:
        """Insert or replace the metadata of an executed transaction."""
        if not txid:
            raise LocalStoreError("txid is required to record a transaction")
        stmt: Select[tuple[ExecutionHistory]] = select(ExecutionHistory).where(
            and_(ExecutionHistory.address_id == account_id, ExecutionHistory.txid == txid)
        )
        try:
            row: ExecutionHistory | None = self.session.scalar(stmt)
            if row is None:
                row = ExecutionHistory(address_id=account_id, txid=txid, created_at=now_iso())
                self.session.add(row)
            row.fee = fee
            row.priority_fee = priority_fee
            row.address = address
            row.outputs = dump_json(outputs or [])
            row.batch_output = dump_json(batch_output)
            self.session.flush()
        except SQLAlchemyError as e:
            raise LocalStoreError(f"Could not record transaction {txid}: {e}") from e
        logger.info("Recorded local transaction", account_id=account_id, txid=txid)
        return _to_metadata(row)
