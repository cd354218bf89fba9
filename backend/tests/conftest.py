"""Root conftest — shared test configuration and market fixtures."""

import os
from datetime import datetime, timezone
from itertools import count

import pytest

# Ensure tests never pick up a developer's .env database
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("LOG_FORMAT", "text")

from energy_market.infrastructure.memory_store import MemoryLedgerStore  # noqa: E402
from energy_market.services.marketplace import Marketplace  # noqa: E402

FIXED_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def memory_store():
    store = MemoryLedgerStore()
    yield store
    store.close()


@pytest.fixture
def sequential_ids():
    """Deterministic id factory: id-1, id-2, ..."""
    counter = count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def marketplace(memory_store, sequential_ids):
    """Marketplace over a fresh memory store with a fixed clock."""
    return Marketplace(memory_store, id_factory=sequential_ids, clock=lambda: FIXED_NOW)
