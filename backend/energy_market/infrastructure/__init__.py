"""Infrastructure Layer — ledger store implementations and cross-cutting concerns.

Invariants:
    - Infrastructure implements core protocols; core never imports infrastructure
    - All SQLAlchemy errors mapped to DatabaseError before leaving this layer

Design Decisions:
    - One module per store backend: memory_store (default) and sql_store (durable)
"""
