"""SQLAlchemy ORM models for the local execution history."""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import MetaData, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=convention)

    def to_dict(self) -> dict[str, Any]:
        return {c.name: getattr(self, c.name) for c in self.__table__.columns}


def utc_now() -> datetime:
    return datetime.now(UTC)


class ExecutionHistory(Base):
    """A transaction this wallet built and broadcast.

    Amounts are stored as decimal strings so nothing is rounded on the way in
    or out. ``outputs`` and ``batch_output`` are JSON TEXT columns.
    """

    __tablename__ = "execution_history"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    address_id: Mapped[int] = mapped_column(nullable=False, index=True)
    txid: Mapped[str] = mapped_column(nullable=False)
    fee: Mapped[str] = mapped_column(nullable=False, default="0")
    priority_fee: Mapped[str] = mapped_column(nullable=False, default="0")
    address: Mapped[str] = mapped_column(nullable=False, default="")
    outputs: Mapped[str | None] = mapped_column()
    batch_output: Mapped[str | None] = mapped_column()
    created_at: Mapped[str] = mapped_column(nullable=False)

    __table_args__ = (UniqueConstraint("address_id", "txid"),)
