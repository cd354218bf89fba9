"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate shape and type at the system boundary
    - Range rules (non-negative quantities, non-empty names) stay in core/enforce_fields

Design Decisions:
    - Separate from records: schemas are API contracts, records are domain values
    - StrictInt for quantities: "10.5" or 10.5 never silently become 10
"""
