"""Registry — creation, update, deletion and listing of producers and consumers.

Invariants:
    - Registration validates every field before the record is persisted
    - New producers start with available_energy == energy_capacity
    - Updates and deletes run under the record's lock (serialized with settlement)
    - Producers cannot be deleted: past transactions reference them

Design Decisions:
    - id_factory injected: uuid4 strings by default, deterministic ids in tests
    - list_* return tuple snapshots: finite, restartable, stable within one call
"""

import logging
from typing import Callable
from uuid import uuid4

from energy_market.core.domain_types import (
    ConsumerId, KilowattHours, Money, ProducerId, RecordKind,
)
from energy_market.core.enforce_fields import (
    apply_consumer_update, apply_producer_update, check_name, check_quantity,
    require_record,
)
from energy_market.core.records import Consumer, Producer
from energy_market.core.repository_protocols import LedgerStore
from energy_market.services.record_locks import RecordLocks

logger = logging.getLogger(__name__)


def new_record_id() -> str:
    return str(uuid4())


class Registry:
    """Producer and consumer lifecycle over a ledger store."""

    def __init__(
        self,
        store: LedgerStore,
        locks: RecordLocks,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self._store = store
        self._locks = locks
        self._new_id = id_factory

    # ─── Producers ──────────────────────────────────────────────

    def register_producer(
        self, name: str, energy_capacity: int, price_per_kwh: int,
    ) -> Producer:
        """Validate and persist a new producer listing."""
        name = check_name(name)
        capacity = check_quantity(energy_capacity, "energy_capacity")
        price = check_quantity(price_per_kwh, "price_per_kwh")
        producer = Producer(
            id=ProducerId(self._new_id()),
            name=name,
            energy_capacity=KilowattHours(capacity),
            price_per_kwh=Money(price),
            available_energy=KilowattHours(capacity),
        )
        self._store.producers.insert(producer.id, producer)
        logger.info(
            f"Producer registered: {name} ({capacity} kWh @ {price})",
            extra={"producer_id": producer.id},
        )
        return producer

    def get_producer(self, producer_id: str) -> Producer:
        return require_record(
            RecordKind.PRODUCER, producer_id, self._store.producers.get(producer_id),
        )

    def update_producer(
        self,
        producer_id: str,
        energy_capacity: int | None = None,
        price_per_kwh: int | None = None,
    ) -> Producer:
        """Partial update of capacity and/or price."""
        with self._locks.hold(RecordKind.PRODUCER.lock_key(producer_id)):
            producer = self.get_producer(producer_id)
            updated = apply_producer_update(producer, energy_capacity, price_per_kwh)
            self._store.producers.insert(updated.id, updated)
        logger.info("Producer updated", extra={"producer_id": producer_id})
        return updated

    def list_producers(self) -> tuple[Producer, ...]:
        return self._store.producers.values()

    # ─── Consumers ──────────────────────────────────────────────

    def register_consumer(self, name: str, energy_need: int, budget: int) -> Consumer:
        """Validate and persist a new consumer."""
        name = check_name(name)
        need = check_quantity(energy_need, "energy_need")
        funds = check_quantity(budget, "budget")
        consumer = Consumer(
            id=ConsumerId(self._new_id()),
            name=name,
            energy_need=KilowattHours(need),
            budget=Money(funds),
        )
        self._store.consumers.insert(consumer.id, consumer)
        logger.info(
            f"Consumer registered: {name} (needs {need} kWh, budget {funds})",
            extra={"consumer_id": consumer.id},
        )
        return consumer

    def get_consumer(self, consumer_id: str) -> Consumer:
        return require_record(
            RecordKind.CONSUMER, consumer_id, self._store.consumers.get(consumer_id),
        )

    def update_consumer(
        self,
        consumer_id: str,
        energy_need: int | None = None,
        budget: int | None = None,
    ) -> Consumer:
        """Partial update of need and/or budget."""
        with self._locks.hold(RecordKind.CONSUMER.lock_key(consumer_id)):
            consumer = self.get_consumer(consumer_id)
            updated = apply_consumer_update(consumer, energy_need, budget)
            self._store.consumers.insert(updated.id, updated)
        logger.info("Consumer updated", extra={"consumer_id": consumer_id})
        return updated

    def delete_consumer(self, consumer_id: str) -> None:
        with self._locks.hold(RecordKind.CONSUMER.lock_key(consumer_id)):
            self.get_consumer(consumer_id)
            self._store.consumers.remove(consumer_id)
        logger.info("Consumer deleted", extra={"consumer_id": consumer_id})

    def list_consumers(self) -> tuple[Consumer, ...]:
        return self._store.consumers.values()
