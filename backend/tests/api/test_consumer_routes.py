"""Consumer Routes — registration, update, deletion and matching over HTTP.

Invariants:
    - PATCH with only budget leaves energy_need untouched
    - DELETE returns 204, later lookups return 404
    - GET /{id}/match returns producer_id or null, never mutates
"""


async def test_create_consumer_returns_201(client):
    res = await client.post(
        "/api/v1/consumers",
        json={"name": "Bakery", "energy_need": 10, "budget": 30},
    )
    assert res.status_code == 201
    assert res.json()["budget"] == 30


async def test_create_consumer_blank_name(client):
    res = await client.post(
        "/api/v1/consumers",
        json={"name": "  ", "energy_need": 10, "budget": 30},
    )
    assert res.status_code == 400
    assert res.json()["error"]["context"]["field"] == "name"


async def test_patch_budget_only(client, consumer):
    res = await client.patch(
        f"/api/v1/consumers/{consumer['id']}", json={"budget": 50},
    )
    assert res.status_code == 200
    assert res.json()["budget"] == 50
    assert res.json()["energy_need"] == 10


async def test_patch_negative_need(client, consumer):
    res = await client.patch(
        f"/api/v1/consumers/{consumer['id']}", json={"energy_need": -1},
    )
    assert res.status_code == 400
    assert res.json()["error"]["context"]["field"] == "energy_need"


async def test_delete_consumer(client, consumer):
    res = await client.delete(f"/api/v1/consumers/{consumer['id']}")
    assert res.status_code == 204

    res = await client.get(f"/api/v1/consumers/{consumer['id']}")
    assert res.status_code == 404
    assert (await client.get("/api/v1/consumers")).json() == []


async def test_delete_unknown_consumer_returns_404(client):
    res = await client.delete("/api/v1/consumers/nope")
    assert res.status_code == 404


async def test_match_returns_producer(client, producer, consumer):
    res = await client.get(f"/api/v1/consumers/{consumer['id']}/match")
    assert res.status_code == 200
    assert res.json() == {"consumer_id": consumer["id"], "producer_id": producer["id"]}


async def test_match_returns_null_when_budget_too_small(client, producer):
    created = await client.post(
        "/api/v1/consumers",
        json={"name": "Frugal", "energy_need": 10, "budget": 5},
    )
    res = await client.get(f"/api/v1/consumers/{created.json()['id']}/match")
    assert res.json()["producer_id"] is None


async def test_match_unknown_consumer_returns_404(client):
    res = await client.get("/api/v1/consumers/nope/match")
    assert res.status_code == 404
