"""Field Enforcement — tests for pure create/update validation.

Tests cover:
    - check_name rejects empty and whitespace-only names, strips the rest
    - check_quantity rejects negatives, floats and bools with the field name
    - apply_producer_update is partial and guards capacity >= available energy
    - apply_consumer_update is partial
    - require_record unwraps present records and raises on absence
"""

import pytest

from energy_market.core.domain_types import RecordKind
from energy_market.core.enforce_fields import (
    apply_consumer_update, apply_producer_update, check_name, check_quantity,
    require_record,
)
from energy_market.core.errors import (
    InvalidInputError, InvariantViolationError, RecordNotFoundError,
)
from energy_market.core.records import Consumer, Producer


def _producer(**overrides) -> Producer:
    fields = dict(
        id="p-1", name="Solar Farm", energy_capacity=100,
        price_per_kwh=2, available_energy=60,
    )
    fields.update(overrides)
    return Producer(**fields)


def _consumer(**overrides) -> Consumer:
    fields = dict(id="c-1", name="Bakery", energy_need=10, budget=30)
    fields.update(overrides)
    return Consumer(**fields)


# ─── check_name / check_quantity ─────────────────────────────────

@pytest.mark.parametrize("name", ["", "   ", None])
def test_check_name_rejects_blank(name):
    with pytest.raises(InvalidInputError) as exc:
        check_name(name)
    assert exc.value.field == "name"


def test_check_name_strips_whitespace():
    assert check_name("  Wind Co-op ") == "Wind Co-op"


def test_check_quantity_rejects_negative_with_field_name():
    with pytest.raises(InvalidInputError) as exc:
        check_quantity(-1, "budget")
    assert exc.value.field == "budget"
    assert exc.value.http_status == 400


@pytest.mark.parametrize("value", [1.5, True, "10"])
def test_check_quantity_rejects_non_integers(value):
    with pytest.raises(InvalidInputError):
        check_quantity(value, "energy_need")


def test_check_quantity_accepts_zero_and_huge_values():
    assert check_quantity(0, "budget") == 0
    assert check_quantity(10**30, "budget") == 10**30


# ─── apply_producer_update ───────────────────────────────────────

def test_producer_update_changes_only_price():
    updated = apply_producer_update(_producer(), price_per_kwh=5)
    assert updated.price_per_kwh == 5
    assert updated.energy_capacity == 100
    assert updated.available_energy == 60


def test_producer_update_keeps_available_energy_when_capacity_changes():
    updated = apply_producer_update(_producer(), energy_capacity=80)
    assert updated.energy_capacity == 80
    assert updated.available_energy == 60


def test_producer_capacity_below_available_energy_is_invariant_violation():
    with pytest.raises(InvariantViolationError) as exc:
        apply_producer_update(_producer(), energy_capacity=59)
    assert exc.value.code == "INVARIANT_VIOLATION"
    assert exc.value.context.producer_id == "p-1"


def test_producer_capacity_equal_to_available_energy_is_allowed():
    assert apply_producer_update(_producer(), energy_capacity=60).energy_capacity == 60


def test_producer_update_rejects_negative_price():
    with pytest.raises(InvalidInputError) as exc:
        apply_producer_update(_producer(), price_per_kwh=-3)
    assert exc.value.field == "price_per_kwh"


def test_producer_update_returns_new_record():
    original = _producer()
    apply_producer_update(original, price_per_kwh=9)
    assert original.price_per_kwh == 2


# ─── apply_consumer_update ───────────────────────────────────────

def test_consumer_update_budget_only_leaves_need_unchanged():
    updated = apply_consumer_update(_consumer(), budget=50)
    assert updated.budget == 50
    assert updated.energy_need == 10


def test_consumer_update_rejects_negative_need():
    with pytest.raises(InvalidInputError) as exc:
        apply_consumer_update(_consumer(), energy_need=-1)
    assert exc.value.field == "energy_need"


def test_consumer_update_with_nothing_is_identity():
    consumer = _consumer()
    assert apply_consumer_update(consumer) == consumer


# ─── require_record ──────────────────────────────────────────────

def test_require_record_returns_present_record():
    consumer = _consumer()
    assert require_record(RecordKind.CONSUMER, "c-1", consumer) is consumer


def test_require_record_raises_not_found():
    with pytest.raises(RecordNotFoundError) as exc:
        require_record(RecordKind.PRODUCER, "missing", None)
    assert exc.value.http_status == 404
    assert exc.value.message == "Producer 'missing' not found"
