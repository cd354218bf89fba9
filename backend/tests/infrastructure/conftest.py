"""Infrastructure fixtures — temporary SQLite ledger store.

Invariants:
    - Every test gets its own database file under tmp_path
    - Tables created via metadata (migrations are tested separately)
"""

import pytest

from energy_market.infrastructure.database import DatabaseSessionManager
from energy_market.infrastructure.sql_store import SqlLedgerStore


@pytest.fixture
def db_manager(tmp_path):
    manager = DatabaseSessionManager(f"sqlite:///{tmp_path / 'ledger.db'}")
    manager.create_tables()
    yield manager
    manager.dispose()


@pytest.fixture
def sql_store(db_manager):
    return SqlLedgerStore(db_manager)
