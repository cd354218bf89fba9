"""SQL Ledger Store — durable collections and transactional units of work.

Tests cover:
    - Row <-> record round trip for each record kind
    - Upsert updates in place, values() ordered by insertion
    - atomic() commits together or rolls back together
    - The full marketplace runs unchanged on the SQL store
    - Health check and DatabaseError mapping
"""

from datetime import datetime, timezone

import pytest

from energy_market.core.errors import DatabaseError, InsufficientBudgetError
from energy_market.core.records import Consumer, EnergyTransaction, Producer
from energy_market.infrastructure.database import DatabaseSessionManager
from energy_market.infrastructure.sql_store import SqlLedgerStore
from energy_market.models import ProducerRow
from energy_market.services.marketplace import Marketplace


def _producer(pid: str = "p-1", available: int = 100) -> Producer:
    return Producer(
        id=pid, name="Solar Farm", energy_capacity=100,
        price_per_kwh=2, available_energy=available,
    )


def test_producer_round_trip(sql_store):
    sql_store.producers.insert("p-1", _producer())
    assert sql_store.producers.get("p-1") == _producer()


def test_transaction_round_trip_keeps_utc(sql_store):
    created = datetime(2026, 3, 1, 8, 30, tzinfo=timezone.utc)
    transaction = EnergyTransaction(
        id="t-1", producer_id="p-1", consumer_id="c-1",
        energy_amount=10, total_price=20, created_at=created,
    )
    sql_store.transactions.insert("t-1", transaction)
    loaded = sql_store.transactions.get("t-1")
    assert loaded == transaction
    assert loaded.created_at.tzinfo is not None


def test_upsert_updates_in_place_and_keeps_order(sql_store):
    for pid in ("a", "b", "c"):
        sql_store.producers.insert(pid, _producer(pid))
    sql_store.producers.insert("a", _producer("a", available=5))
    values = sql_store.producers.values()
    assert [p.id for p in values] == ["a", "b", "c"]
    assert values[0].available_energy == 5


def test_remove_deletes_row(sql_store):
    sql_store.consumers.insert("c-1", Consumer(id="c-1", name="Bakery", energy_need=1, budget=1))
    sql_store.consumers.remove("c-1")
    assert sql_store.consumers.get("c-1") is None


def test_only_consumer_rows_are_removable(sql_store):
    assert not hasattr(sql_store.producers, "remove")
    assert not hasattr(sql_store.transactions, "remove")


def test_atomic_rolls_back_on_error(sql_store):
    with pytest.raises(ValueError):
        with sql_store.atomic():
            sql_store.producers.insert("p-1", _producer())
            assert sql_store.producers.get("p-1") is not None
            raise ValueError("abort")
    assert sql_store.producers.get("p-1") is None


def test_atomic_commits(sql_store):
    with sql_store.atomic():
        sql_store.producers.insert("p-1", _producer())
        sql_store.producers.insert("p-2", _producer("p-2"))
    assert len(sql_store.producers.values()) == 2


def test_marketplace_reference_trade_on_sql_store(sql_store):
    marketplace = Marketplace(sql_store)
    producer = marketplace.create_producer("Solar Farm", 100, 2)
    consumer = marketplace.create_consumer("Bakery", 10, 30)

    assert marketplace.find_match(consumer.id) == producer.id
    transaction = marketplace.execute_transaction(consumer.id, producer.id)

    assert transaction.total_price == 20
    assert marketplace.get_producer(producer.id).available_energy == 90
    assert marketplace.get_consumer(consumer.id).budget == 10
    assert marketplace.list_transactions() == (transaction,)

    with pytest.raises(InsufficientBudgetError):
        marketplace.execute_transaction(consumer.id, producer.id)
    assert len(marketplace.list_transactions()) == 1


def test_sql_store_survives_reopen(tmp_path):
    url = f"sqlite:///{tmp_path / 'durable.db'}"
    manager = DatabaseSessionManager(url)
    manager.create_tables()
    Marketplace(SqlLedgerStore(manager)).create_producer("Solar Farm", 100, 2)
    manager.dispose()

    reopened = DatabaseSessionManager(url)
    try:
        assert [p.name for p in SqlLedgerStore(reopened).producers.values()] == ["Solar Farm"]
    finally:
        reopened.dispose()


def test_health_check(sql_store):
    assert sql_store.health_check() is True


def test_duplicate_id_maps_to_database_error(db_manager):
    with pytest.raises(DatabaseError) as exc:
        with db_manager.session() as db:
            db.add(ProducerRow(id="dup", name="a", energy_capacity=1, price_per_kwh=1, available_energy=1))
            db.add(ProducerRow(id="dup", name="b", energy_capacity=1, price_per_kwh=1, available_energy=1))
            db.commit()
    assert exc.value.http_status == 503
