"""In-Memory Ledger Store — insertion-ordered dicts with a staged unit of work.

Invariants:
    - values() returns a tuple snapshot in insertion order (upserts keep position)
    - Writes inside atomic() are staged per thread and applied under one lock on exit
    - An exception inside atomic() discards every staged write
    - Readers never observe a partially applied unit of work

Design Decisions:
    - Per-thread staging over whole-store snapshots: a rollback can never clobber
      writes committed concurrently by another thread
    - Nested atomic() joins the outer unit of work
    - State lives on the store object, not at module level: one store per Marketplace
"""

import logging
import threading
from contextlib import contextmanager
from typing import Generic, Iterator, TypeVar

from energy_market.core.records import Consumer, EnergyTransaction, Producer

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")

_REMOVED = object()


class MemoryCollection(Generic[RecordT]):
    """One keyed collection backed by a dict."""

    def __init__(self, name: str, store: "MemoryLedgerStore"):
        self.name = name
        self._store = store
        self._records: dict[str, RecordT] = {}

    def get(self, record_id: str) -> RecordT | None:
        pending = self._store._pending()
        if pending is not None and (self, record_id) in pending:
            staged = pending[(self, record_id)]
            return None if staged is _REMOVED else staged
        with self._store._lock:
            return self._records.get(record_id)

    def insert(self, record_id: str, record: RecordT) -> None:
        pending = self._store._pending()
        if pending is not None:
            pending[(self, record_id)] = record
            return
        with self._store._lock:
            self._records[record_id] = record

    def values(self) -> tuple[RecordT, ...]:
        with self._store._lock:
            return tuple(self._records.values())

    def _apply(self, record_id: str, staged: object) -> None:
        if staged is _REMOVED:
            self._records.pop(record_id, None)
        else:
            self._records[record_id] = staged


class RemovableMemoryCollection(MemoryCollection[RecordT]):
    """Collection whose records may be deleted."""

    def remove(self, record_id: str) -> None:
        pending = self._store._pending()
        if pending is not None:
            pending[(self, record_id)] = _REMOVED
            return
        with self._store._lock:
            self._records.pop(record_id, None)


class MemoryLedgerStore:
    """Process-local ledger store. Contents are lost when the process exits."""

    def __init__(self):
        self._lock = threading.RLock()
        self._local = threading.local()
        self.producers: MemoryCollection[Producer] = MemoryCollection("producers", self)
        self.consumers: RemovableMemoryCollection[Consumer] = RemovableMemoryCollection(
            "consumers", self,
        )
        self.transactions: MemoryCollection[EnergyTransaction] = MemoryCollection(
            "transactions", self,
        )

    def _pending(self) -> dict | None:
        return getattr(self._local, "pending", None)

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Stage writes; apply them all at once if the block completes."""
        if self._pending() is not None:
            yield
            return
        self._local.pending = {}
        try:
            yield
            pending = self._local.pending
            with self._lock:
                for (collection, record_id), staged in pending.items():
                    collection._apply(record_id, staged)
        finally:
            self._local.pending = None

    def health_check(self) -> bool:
        return True

    def close(self) -> None:
        logger.info("Memory ledger store closed")
