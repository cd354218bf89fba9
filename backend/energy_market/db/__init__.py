"""Database Infrastructure — SQLAlchemy Base for the durable ledger store.

Invariants:
    - Single engine per process (owned by DatabaseSessionManager)
    - Sessions are sync: settlement holds record locks across the whole unit of work
"""
