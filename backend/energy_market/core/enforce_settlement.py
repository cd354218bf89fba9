"""Settlement Enforcement — validates a trade and plans its state changes.

Invariants:
    - plan_settlement is PURE: returns a SettlementPlan, does NOT touch the store
    - Checks run in a fixed order: zero need, energy, budget
    - total_price uses the producer's price as passed in (current at settlement time)
    - A plan always satisfies: producer energy and consumer budget stay >= 0,
      transaction.total_price == energy_amount * price_per_kwh

Design Decisions:
    - Separated from match_policy: the matcher is advisory, settlement re-validates
      everything on records read under lock
    - Clock and transaction id injected: deterministic tests, no hidden IO in core
"""

from dataclasses import dataclass, replace
from datetime import datetime

from energy_market.core.domain_types import TransactionId
from energy_market.core.errors import (
    ErrorContext, InsufficientBudgetError, InsufficientEnergyError, InvalidInputError,
)
from energy_market.core.records import Consumer, EnergyTransaction, Producer


@dataclass(frozen=True)
class SettlementPlan:
    """The three writes a successful settlement commits together."""
    producer: Producer
    consumer: Consumer
    transaction: EnergyTransaction


def plan_settlement(
    consumer: Consumer,
    producer: Producer,
    transaction_id: TransactionId,
    now: datetime,
) -> SettlementPlan:
    """Validate the pair and compute post-trade records. Raises on rejection."""
    context = ErrorContext(producer_id=producer.id, consumer_id=consumer.id)
    amount = consumer.energy_need

    if amount <= 0:
        raise InvalidInputError(
            "energy_need must be positive to settle a trade", "energy_need", context,
        )
    if amount > producer.available_energy:
        raise InsufficientEnergyError(amount, producer.available_energy, context)

    total_price = amount * producer.price_per_kwh
    if consumer.budget < total_price:
        raise InsufficientBudgetError(total_price, consumer.budget, context)

    return SettlementPlan(
        producer=replace(
            producer, available_energy=producer.available_energy - amount,
        ),
        consumer=replace(consumer, budget=consumer.budget - total_price),
        transaction=EnergyTransaction(
            id=transaction_id,
            producer_id=producer.id,
            consumer_id=consumer.id,
            energy_amount=amount,
            total_price=total_price,
            created_at=now,
        ),
    )
