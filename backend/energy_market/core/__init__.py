"""Core Layer — pure market rules, no IO, no locks, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (clock and ids are injected)

Design Decisions:
    - Functional core separated from imperative shell: services/ takes locks and
      talks to the store, core/ decides
"""
