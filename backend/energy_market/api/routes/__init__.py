"""Route Modules — one file per resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain business logic (delegate to Marketplace)

Design Decisions:
    - Sync handlers: FastAPI runs them in its threadpool, the marketplace blocks
      on record locks without stalling the event loop
"""
