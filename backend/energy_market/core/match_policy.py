"""Match Policy — first-fit producer selection for a consumer.

Invariants:
    - select_first_fit is PURE: reads records, returns one of them or None
    - Producers are scanned in the order given (store insertion order)
    - The first eligible producer wins; later, cheaper producers are never considered
    - Affordability is checked exactly: price * need <= budget (no division)

Design Decisions:
    - First-fit over best-fit: keeps producer selection stable for existing clients;
      best-fit would change which producer wins among several eligible ones
    - Zero-need consumers: implied max price is unbounded, so any producer matches
"""

from collections.abc import Iterable

from energy_market.core.records import Consumer, Producer


def can_supply(producer: Producer, consumer: Consumer) -> bool:
    return producer.available_energy >= consumer.energy_need


def within_budget(producer: Producer, consumer: Consumer) -> bool:
    """price_per_kwh <= budget / energy_need, cross-multiplied."""
    return producer.price_per_kwh * consumer.energy_need <= consumer.budget


def is_eligible(producer: Producer, consumer: Consumer) -> bool:
    return can_supply(producer, consumer) and within_budget(producer, consumer)


def select_first_fit(
    consumer: Consumer, producers: Iterable[Producer],
) -> Producer | None:
    """Return the first producer able to serve the consumer, or None."""
    for producer in producers:
        if is_eligible(producer, consumer):
            return producer
    return None
