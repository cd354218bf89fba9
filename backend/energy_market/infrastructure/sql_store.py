"""SQL Ledger Store — durable KeyedCollections over SQLAlchemy ORM rows.

Invariants:
    - Each collection translates rows <-> frozen records at this boundary only
    - Outside atomic(), every call runs in its own committed session
    - Inside atomic(), every call on the same thread shares one session; it commits
      once when the block completes and rolls back if it raises
    - values() is ordered by seq (insertion order)

Design Decisions:
    - Thread-local session over passing a session through the core: the core
      protocol stays storage-agnostic
    - Timestamps normalized to UTC on read: SQLite drops tzinfo
"""

import logging
import threading
from contextlib import contextmanager
from datetime import timezone
from typing import Callable, Generic, Iterator, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from energy_market.core.domain_types import (
    ConsumerId, KilowattHours, Money, ProducerId, TransactionId,
)
from energy_market.core.records import Consumer, EnergyTransaction, Producer
from energy_market.infrastructure.database import DatabaseSessionManager
from energy_market.models import ConsumerRow, ProducerRow, TransactionRow

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")


def _producer_from_row(row: ProducerRow) -> Producer:
    return Producer(
        id=ProducerId(row.id),
        name=row.name,
        energy_capacity=KilowattHours(row.energy_capacity),
        price_per_kwh=Money(row.price_per_kwh),
        available_energy=KilowattHours(row.available_energy),
    )


def _consumer_from_row(row: ConsumerRow) -> Consumer:
    return Consumer(
        id=ConsumerId(row.id),
        name=row.name,
        energy_need=KilowattHours(row.energy_need),
        budget=Money(row.budget),
    )


def _transaction_from_row(row: TransactionRow) -> EnergyTransaction:
    created_at = row.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return EnergyTransaction(
        id=TransactionId(row.id),
        producer_id=ProducerId(row.producer_id),
        consumer_id=ConsumerId(row.consumer_id),
        energy_amount=KilowattHours(row.energy_amount),
        total_price=Money(row.total_price),
        created_at=created_at,
    )


def _record_fields(record) -> dict:
    fields = dict(vars(record))
    fields.pop("id")
    return fields


class SqlCollection(Generic[RecordT]):
    """One keyed collection backed by an ORM table."""

    def __init__(
        self,
        store: "SqlLedgerStore",
        row_type: type,
        from_row: Callable[[object], RecordT],
    ):
        self._store = store
        self._row_type = row_type
        self._from_row = from_row

    def _find(self, db: Session, record_id: str):
        return db.scalar(
            select(self._row_type).where(self._row_type.id == record_id),
        )

    def get(self, record_id: str) -> RecordT | None:
        with self._store._session() as db:
            row = self._find(db, record_id)
            return self._from_row(row) if row is not None else None

    def insert(self, record_id: str, record: RecordT) -> None:
        with self._store._session() as db:
            row = self._find(db, record_id)
            fields = _record_fields(record)
            if row is None:
                db.add(self._row_type(id=record_id, **fields))
            else:
                for key, value in fields.items():
                    setattr(row, key, value)
            db.flush()

    def values(self) -> tuple[RecordT, ...]:
        with self._store._session() as db:
            rows = db.scalars(
                select(self._row_type).order_by(self._row_type.seq),
            ).all()
            return tuple(self._from_row(row) for row in rows)


class RemovableSqlCollection(SqlCollection[RecordT]):
    """Table whose rows may be deleted."""

    def remove(self, record_id: str) -> None:
        with self._store._session() as db:
            db.execute(
                delete(self._row_type).where(self._row_type.id == record_id),
            )


class SqlLedgerStore:
    """Ledger store persisted through SQLAlchemy."""

    def __init__(self, db_manager: DatabaseSessionManager):
        self.db_manager = db_manager
        self._local = threading.local()
        self.producers: SqlCollection[Producer] = SqlCollection(
            self, ProducerRow, _producer_from_row,
        )
        self.consumers: RemovableSqlCollection[Consumer] = RemovableSqlCollection(
            self, ConsumerRow, _consumer_from_row,
        )
        self.transactions: SqlCollection[EnergyTransaction] = SqlCollection(
            self, TransactionRow, _transaction_from_row,
        )

    def _active(self) -> Session | None:
        return getattr(self._local, "session", None)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        active = self._active()
        if active is not None:
            yield active
            return
        with self.db_manager.session() as db:
            yield db
            db.commit()

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Run the block in one database transaction."""
        if self._active() is not None:
            yield
            return
        with self.db_manager.session() as db:
            self._local.session = db
            try:
                yield
                db.commit()
            finally:
                self._local.session = None

    def health_check(self) -> bool:
        return self.db_manager.health_check()

    def close(self) -> None:
        self.db_manager.dispose()
        logger.info("SQL ledger store closed")
