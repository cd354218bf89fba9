"""API test fixtures — FastAPI app wired to a fresh in-memory Marketplace.

Invariants:
    - Every test gets its own Marketplace on app.state (no cross-test leakage)
    - The lifespan is bypassed: ASGITransport does not send lifespan events

Design Decisions:
    - httpx AsyncClient over TestClient: same async style as the rest of the suite
"""

import pytest
from httpx import ASGITransport, AsyncClient

from energy_market.main import app


@pytest.fixture
async def client(marketplace):
    original = getattr(app.state, "marketplace", None)
    app.state.marketplace = marketplace
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.state.marketplace = original


@pytest.fixture
async def producer(client):
    res = await client.post(
        "/api/v1/producers",
        json={"name": "Solar Farm", "energy_capacity": 100, "price_per_kwh": 2},
    )
    return res.json()


@pytest.fixture
async def consumer(client):
    res = await client.post(
        "/api/v1/consumers",
        json={"name": "Bakery", "energy_need": 10, "budget": 30},
    )
    return res.json()
