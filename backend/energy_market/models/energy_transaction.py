"""Transaction ORM — append-only ledger of settled trades.

Invariants:
    - Rows are inserted once and never updated or deleted
    - total_price == energy_amount * price_per_kwh at settlement time

Design Decisions:
    - producer_id/consumer_id are indexed plain columns, not foreign keys:
      consumers are deletable but their ledger entries must survive
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from energy_market.db.base import Base


class TransactionRow(Base):
    """One settled trade."""
    __tablename__ = "transactions"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(36), unique=True, index=True, nullable=False)
    producer_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    consumer_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    energy_amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    total_price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
