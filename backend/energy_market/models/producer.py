"""Producer ORM — persisted producer listing.

Invariants:
    - id is the market identifier (uuid4 string), unique and immutable
    - seq is the insertion position; never reused
    - 0 <= available_energy <= energy_capacity (enforced by core, not the DB)
"""

from sqlalchemy import BigInteger, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from energy_market.db.base import Base


class ProducerRow(Base):
    """Producer listing — capacity, price and remaining energy."""
    __tablename__ = "producers"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(36), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    energy_capacity: Mapped[int] = mapped_column(BigInteger, nullable=False)
    price_per_kwh: Mapped[int] = mapped_column(BigInteger, nullable=False)
    available_energy: Mapped[int] = mapped_column(BigInteger, nullable=False)
