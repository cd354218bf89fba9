"""Service Layer — stateful market components over a ledger store.

Invariants:
    - Services never import from api/ (transport-agnostic, callable in-process)
    - Every mutation of an existing record happens under that record's lock

Design Decisions:
    - One component per responsibility: Registry, Matcher, SettlementEngine,
      wired together by Marketplace
"""
