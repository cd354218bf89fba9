"""Consumer ORM — persisted consumer demand and budget.

Invariants:
    - id is the market identifier (uuid4 string), unique and immutable
    - Rows may be deleted; past transactions keep their consumer_id
"""

from sqlalchemy import BigInteger, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from energy_market.db.base import Base


class ConsumerRow(Base):
    __tablename__ = "consumers"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(36), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    energy_need: Mapped[int] = mapped_column(BigInteger, nullable=False)
    budget: Mapped[int] = mapped_column(BigInteger, nullable=False)
