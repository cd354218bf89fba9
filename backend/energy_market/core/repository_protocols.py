"""Boundary Protocols — contracts between the market core and its ledger store.

Invariants:
    - Core NEVER imports a store implementation — dependency arrows point inward only
    - get() returns the record or None; no other absence shape exists
    - values() returns a finite snapshot in insertion order, safe to iterate repeatedly
    - Only consumers can be removed: producers stay referenced by the ledger and
      the ledger itself is append-only
    - Writes issued inside atomic() become visible together or not at all

Design Decisions:
    - Protocol over ABC: structural subtyping, MemoryLedgerStore and SqlLedgerStore
      share no base class
    - Sync protocol: settlement is a blocking critical section, async would only
      add suspension points inside the lock
"""

from contextlib import AbstractContextManager
from typing import Protocol, TypeVar

from energy_market.core.records import Consumer, EnergyTransaction, Producer

RecordT = TypeVar("RecordT")


class KeyedCollection(Protocol[RecordT]):
    """Contract for one keyed record collection — implemented by infrastructure."""
    def get(self, record_id: str) -> RecordT | None: ...
    def insert(self, record_id: str, record: RecordT) -> None: ...
    def values(self) -> tuple[RecordT, ...]: ...


class RemovableCollection(KeyedCollection[RecordT], Protocol[RecordT]):
    """Keyed collection whose records may be deleted (consumers only)."""
    def remove(self, record_id: str) -> None: ...


class LedgerStore(Protocol):
    """Contract for the three market collections plus a unit of work."""
    producers: KeyedCollection[Producer]
    consumers: RemovableCollection[Consumer]
    transactions: KeyedCollection[EnergyTransaction]

    def atomic(self) -> AbstractContextManager[None]: ...
    def health_check(self) -> bool: ...
    def close(self) -> None: ...
