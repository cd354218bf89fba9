"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the ledger store is unreachable (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from energy_market.api.dependencies import get_marketplace
from energy_market.services.marketplace import Marketplace

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "energy-market-api",
        "version": "1.0.0",
    }


@router.get("/ready")
def readiness_check(marketplace: Marketplace = Depends(get_marketplace)):
    """Readiness probe — includes ledger store connectivity."""
    if not marketplace.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "ledger_store_unavailable",
            },
        )
    return {"status": "ready", "checks": {"ledger_store": "healthy"}}
