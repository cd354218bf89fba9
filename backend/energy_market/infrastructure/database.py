"""Database Session Manager — sync connection pool with automatic rollback and health checks.

Invariants:
    - Every session rolls back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions mapped to DatabaseError (core/errors.py)
    - Callers commit explicitly; leaving the context without commit discards work

Design Decisions:
    - Sync engine over async: ledger writes happen inside a held record lock,
      FastAPI runs the sync route handlers in its threadpool
    - SQLite gets check_same_thread=False (threadpool) and StaticPool for :memory:
    - expire_on_commit=False: rows stay readable after the unit of work closes
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, text
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from energy_market.core.errors import DatabaseError
from energy_market.db.base import Base
import energy_market.models  # noqa: F401  (populates Base.metadata)

logger = logging.getLogger(__name__)


def _engine_options(database_url: str, pool_size: int, max_overflow: int) -> dict:
    if database_url.startswith("sqlite"):
        options: dict = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url.rstrip("/") == "sqlite:":
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


class DatabaseSessionManager:
    """Manages sync database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_engine(
            database_url, **_engine_options(database_url, pool_size, max_overflow),
        )
        self._session_factory = sessionmaker(
            self.engine, expire_on_commit=False,
        )

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise DatabaseError("Integrity constraint violated", "commit")
        except OperationalError as e:
            session.rollback()
            logger.error(f"DB operational error: {e}")
            raise DatabaseError("Connection or operational error", "execute")
        except DBAPIError as e:
            session.rollback()
            logger.error(f"DB driver error: {e}")
            raise DatabaseError("Database driver error", "query")
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError("Database operation failed", "unknown")
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_tables(self) -> None:
        """Create missing tables (development / tests; alembic owns production)."""
        Base.metadata.create_all(self.engine)

    def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            with self.session() as db:
                db.execute(text("SELECT 1"))
            return True
        except DatabaseError as e:
            logger.error(f"DB health check failed: {e}")
            return False

    def dispose(self) -> None:
        self.engine.dispose()
