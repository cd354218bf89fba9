"""Market Records — immutable Producer, Consumer and Transaction values.

Invariants:
    - Records are frozen: every mutation goes through dataclasses.replace()
    - Producer.available_energy starts equal to energy_capacity
    - Transaction is never replaced once stored (append-only ledger)

Design Decisions:
    - Frozen dataclasses over ORM objects: the core never sees persistence types,
      stores translate rows <-> records at their boundary
    - to_dict() kept on the record: API and SQL layers share one field mapping
"""

from dataclasses import dataclass, asdict
from datetime import datetime

from energy_market.core.domain_types import (
    ProducerId, ConsumerId, TransactionId, KilowattHours, Money,
)


@dataclass(frozen=True)
class Producer:
    """Entity selling energy capacity at a per-unit price."""
    id: ProducerId
    name: str
    energy_capacity: KilowattHours
    price_per_kwh: Money
    available_energy: KilowattHours

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Consumer:
    """Entity buying a fixed energy amount within a budget."""
    id: ConsumerId
    name: str
    energy_need: KilowattHours
    budget: Money

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class EnergyTransaction:
    """One settled trade in the append-only ledger."""
    id: TransactionId
    producer_id: ProducerId
    consumer_id: ConsumerId
    energy_amount: KilowattHours
    total_price: Money
    created_at: datetime

    def to_dict(self) -> dict:
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        return data
