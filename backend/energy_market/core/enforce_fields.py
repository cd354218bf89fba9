"""Field Enforcement — validates create/update arguments and resolves lookups.

Invariants:
    - Validation is PURE: raises InvalidInputError / InvariantViolationError, never mutates
    - Every numeric field is an exact int >= 0 (bool rejected)
    - Names are non-empty after stripping whitespace
    - require_record is the single place where an absent record becomes RecordNotFoundError

Design Decisions:
    - Errors carry the offending field name: the API surfaces it to the caller verbatim
    - Update helpers return a new frozen record; the shell decides when to persist it
"""

from dataclasses import replace
from typing import TypeVar

from energy_market.core.domain_types import RecordKind
from energy_market.core.errors import (
    ErrorContext, InvalidInputError, InvariantViolationError, RecordNotFoundError,
)
from energy_market.core.records import Consumer, Producer

RecordT = TypeVar("RecordT")


def require_record(kind: RecordKind, record_id: str, record: RecordT | None) -> RecordT:
    """Unwrap a store lookup or raise RecordNotFoundError."""
    if record is None:
        raise RecordNotFoundError(kind.value, record_id)
    return record


def check_name(name: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidInputError("name must be a non-empty string", "name")
    return name.strip()


def check_quantity(value: int, field_name: str) -> int:
    """Exact non-negative integer check for energy and money fields."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"{field_name} must be an integer", field_name)
    if value < 0:
        raise InvalidInputError(
            f"{field_name} must be >= 0, got {value}", field_name,
        )
    return value


def apply_producer_update(
    producer: Producer,
    energy_capacity: int | None = None,
    price_per_kwh: int | None = None,
) -> Producer:
    """Partial producer update. Capacity may never drop below available energy."""
    changes: dict = {}
    if energy_capacity is not None:
        check_quantity(energy_capacity, "energy_capacity")
        if energy_capacity < producer.available_energy:
            raise InvariantViolationError(
                f"energy_capacity {energy_capacity} is below available_energy "
                f"{producer.available_energy}",
                ErrorContext(producer_id=producer.id, field="energy_capacity"),
            )
        changes["energy_capacity"] = energy_capacity
    if price_per_kwh is not None:
        changes["price_per_kwh"] = check_quantity(price_per_kwh, "price_per_kwh")
    return replace(producer, **changes)


def apply_consumer_update(
    consumer: Consumer,
    energy_need: int | None = None,
    budget: int | None = None,
) -> Consumer:
    """Partial consumer update. Omitted fields are left untouched."""
    changes: dict = {}
    if energy_need is not None:
        changes["energy_need"] = check_quantity(energy_need, "energy_need")
    if budget is not None:
        changes["budget"] = check_quantity(budget, "budget")
    return replace(consumer, **changes)
