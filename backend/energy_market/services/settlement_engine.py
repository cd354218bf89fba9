"""Settlement Engine — commits a (consumer, producer) trade as one unit.

Invariants:
    - Consumer and producer locks are held from first read to last write
    - Records are re-read and re-validated under lock; prior match results are not trusted
    - The producer's current price is used; quotes are never locked in
    - The three writes (producer, consumer, transaction) happen inside one store
      unit of work: all land or none do
    - Any rejection leaves every record unchanged

Design Decisions:
    - Validation delegated to core.enforce_settlement.plan_settlement (pure),
      this class only sequences lock -> read -> plan -> write
    - clock and id_factory injected for deterministic tests
    - match_and_settle runs the advisory matcher outside the locks, then settles
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from energy_market.core.domain_types import RecordKind, TransactionId
from energy_market.core.enforce_fields import require_record
from energy_market.core.enforce_settlement import plan_settlement
from energy_market.core.errors import EnergyMarketError, NoMatchError
from energy_market.core.records import EnergyTransaction
from energy_market.core.repository_protocols import LedgerStore
from energy_market.services.matcher import Matcher
from energy_market.services.record_locks import RecordLocks
from energy_market.services.registry import new_record_id

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SettlementEngine:
    """Executes trades and exposes the transaction ledger."""

    def __init__(
        self,
        store: LedgerStore,
        locks: RecordLocks,
        matcher: Matcher,
        id_factory: Callable[[], str] = new_record_id,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._store = store
        self._locks = locks
        self._matcher = matcher
        self._new_id = id_factory
        self._clock = clock

    def execute_transaction(
        self, consumer_id: str, producer_id: str,
    ) -> EnergyTransaction:
        """Settle consumer's full energy need against producer at its current price."""
        with self._locks.hold(
            RecordKind.CONSUMER.lock_key(consumer_id),
            RecordKind.PRODUCER.lock_key(producer_id),
        ):
            consumer = require_record(
                RecordKind.CONSUMER, consumer_id,
                self._store.consumers.get(consumer_id),
            )
            producer = require_record(
                RecordKind.PRODUCER, producer_id,
                self._store.producers.get(producer_id),
            )
            try:
                plan = plan_settlement(
                    consumer, producer, TransactionId(self._new_id()), self._clock(),
                )
            except EnergyMarketError as e:
                logger.warning(
                    f"Settlement rejected: {e.message}",
                    extra={
                        "consumer_id": consumer_id,
                        "producer_id": producer_id,
                        "error_code": e.code,
                    },
                )
                raise

            with self._store.atomic():
                self._store.producers.insert(plan.producer.id, plan.producer)
                self._store.consumers.insert(plan.consumer.id, plan.consumer)
                self._store.transactions.insert(plan.transaction.id, plan.transaction)

        transaction = plan.transaction
        logger.info(
            f"Trade settled: {transaction.energy_amount} kWh for {transaction.total_price}",
            extra={
                "consumer_id": consumer_id,
                "producer_id": producer_id,
                "transaction_id": transaction.id,
            },
        )
        return transaction

    def match_and_settle(self, consumer_id: str) -> EnergyTransaction:
        """Find the first-fit producer for the consumer and settle against it."""
        producer_id = self._matcher.find_match(consumer_id)
        if producer_id is None:
            raise NoMatchError(consumer_id)
        return self.execute_transaction(consumer_id, producer_id)

    def get_transaction(self, transaction_id: str) -> EnergyTransaction:
        return require_record(
            RecordKind.TRANSACTION, transaction_id,
            self._store.transactions.get(transaction_id),
        )

    def list_transactions(self) -> tuple[EnergyTransaction, ...]:
        return self._store.transactions.values()
