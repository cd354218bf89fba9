"""Record Locks — per-record mutual exclusion shared by registry and settlement.

Invariants:
    - At most one threading.Lock per key while any caller holds or waits on it
    - A key's entry is dropped when its last holder or waiter leaves
    - hold() acquires keys in sorted order and releases them in reverse
    - Duplicate keys in one hold() call are acquired once

Design Decisions:
    - Sorted acquisition: two settlements locking the same pair in opposite
      argument order cannot deadlock
    - Entries are reference-counted under the table guard: lookups for unknown
      or deleted records leave nothing behind, and a lock is never dropped while
      a waiter is queued on it
"""

import threading
from contextlib import ExitStack, contextmanager
from typing import Iterator


class RecordLocks:
    """Lock table keyed by RecordKind.lock_key() strings."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        self._users: dict[str, int] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    def _checkout(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            self._users[key] = self._users.get(key, 0) + 1
            return lock

    def _checkin(self, key: str) -> None:
        with self._guard:
            remaining = self._users[key] - 1
            if remaining:
                self._users[key] = remaining
            else:
                del self._users[key]
                del self._locks[key]

    @contextmanager
    def hold(self, *keys: str) -> Iterator[None]:
        """Hold every listed record lock for the duration of the block."""
        with ExitStack() as stack:
            for key in sorted(set(keys)):
                lock = self._checkout(key)
                stack.callback(self._checkin, key)
                lock.acquire()
                stack.callback(lock.release)
            yield
