"""Marketplace — owns a ledger store and wires the market components around it.

Invariants:
    - Registry and SettlementEngine share ONE RecordLocks table
    - The marketplace is the single owner of its store: close() closes the store
    - Every command surface operation is one method call here

Design Decisions:
    - Explicit object over module-level singletons: constructed in the FastAPI
      lifespan (or by any in-process caller), torn down at shutdown
    - build_store() selects the backend from Settings; the core never sees which
"""

import logging
from datetime import datetime
from typing import Callable

from energy_market.config import Settings
from energy_market.core.domain_types import ProducerId
from energy_market.core.records import Consumer, EnergyTransaction, Producer
from energy_market.core.repository_protocols import LedgerStore
from energy_market.infrastructure.database import DatabaseSessionManager
from energy_market.infrastructure.memory_store import MemoryLedgerStore
from energy_market.infrastructure.sql_store import SqlLedgerStore
from energy_market.services.matcher import Matcher
from energy_market.services.record_locks import RecordLocks
from energy_market.services.registry import Registry, new_record_id
from energy_market.services.settlement_engine import SettlementEngine, utc_now

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> LedgerStore:
    """Instantiate the configured ledger store backend."""
    if settings.store_backend == "sql":
        db_manager = DatabaseSessionManager(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        if settings.database_create_tables:
            db_manager.create_tables()
        logger.info("Using SQL ledger store")
        return SqlLedgerStore(db_manager)
    logger.info("Using in-memory ledger store")
    return MemoryLedgerStore()


class Marketplace:
    """In-process command surface for the energy market."""

    def __init__(
        self,
        store: LedgerStore,
        id_factory: Callable[[], str] = new_record_id,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.locks = RecordLocks()
        self.registry = Registry(store, self.locks, id_factory)
        self.matcher = Matcher(store)
        self.settlement = SettlementEngine(
            store, self.locks, self.matcher, id_factory, clock,
        )

    # ─── Producers ──────────────────────────────────────────────

    def create_producer(
        self, name: str, energy_capacity: int, price_per_kwh: int,
    ) -> Producer:
        return self.registry.register_producer(name, energy_capacity, price_per_kwh)

    def list_producers(self) -> tuple[Producer, ...]:
        return self.registry.list_producers()

    def get_producer(self, producer_id: str) -> Producer:
        return self.registry.get_producer(producer_id)

    def update_producer(
        self,
        producer_id: str,
        energy_capacity: int | None = None,
        price_per_kwh: int | None = None,
    ) -> Producer:
        return self.registry.update_producer(producer_id, energy_capacity, price_per_kwh)

    # ─── Consumers ──────────────────────────────────────────────

    def create_consumer(self, name: str, energy_need: int, budget: int) -> Consumer:
        return self.registry.register_consumer(name, energy_need, budget)

    def list_consumers(self) -> tuple[Consumer, ...]:
        return self.registry.list_consumers()

    def get_consumer(self, consumer_id: str) -> Consumer:
        return self.registry.get_consumer(consumer_id)

    def update_consumer(
        self,
        consumer_id: str,
        energy_need: int | None = None,
        budget: int | None = None,
    ) -> Consumer:
        return self.registry.update_consumer(consumer_id, energy_need, budget)

    def delete_consumer(self, consumer_id: str) -> None:
        self.registry.delete_consumer(consumer_id)

    # ─── Trading ────────────────────────────────────────────────

    def find_match(self, consumer_id: str) -> ProducerId | None:
        return self.matcher.find_match(consumer_id)

    def execute_transaction(
        self, consumer_id: str, producer_id: str,
    ) -> EnergyTransaction:
        return self.settlement.execute_transaction(consumer_id, producer_id)

    def match_and_settle(self, consumer_id: str) -> EnergyTransaction:
        return self.settlement.match_and_settle(consumer_id)

    def list_transactions(self) -> tuple[EnergyTransaction, ...]:
        return self.settlement.list_transactions()

    def get_transaction(self, transaction_id: str) -> EnergyTransaction:
        return self.settlement.get_transaction(transaction_id)

    # ─── Lifecycle ──────────────────────────────────────────────

    def health_check(self) -> bool:
        return self.store.health_check()

    def close(self) -> None:
        self.store.close()
