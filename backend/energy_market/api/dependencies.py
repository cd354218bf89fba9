"""Route Dependencies — resolves the Marketplace owned by the running app.

Invariants:
    - The Marketplace is created in the lifespan and stored on app.state
    - Requests arriving before startup completes fail loudly
"""

from fastapi import Request

from energy_market.services.marketplace import Marketplace


def get_marketplace(request: Request) -> Marketplace:
    """FastAPI dependency for the process Marketplace."""
    marketplace = getattr(request.app.state, "marketplace", None)
    if marketplace is None:
        raise RuntimeError("Marketplace not initialized")
    return marketplace
