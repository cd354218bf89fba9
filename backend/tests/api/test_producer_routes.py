"""Producer Routes — registration, listing, lookup and partial update over HTTP.

Invariants:
    - POST returns 201 with available_energy == energy_capacity
    - Negative quantities → 400 INVALID_INPUT naming the field
    - Non-integer quantities → 400 VALIDATION_ERROR (pydantic)
    - Unknown ids → 404 RECORD_NOT_FOUND
"""


async def test_create_producer_returns_201(client):
    res = await client.post(
        "/api/v1/producers",
        json={"name": "Solar Farm", "energy_capacity": 100, "price_per_kwh": 2},
    )
    assert res.status_code == 201
    body = res.json()
    assert body["available_energy"] == 100
    assert body["id"] == "id-1"


async def test_create_producer_negative_capacity_names_field(client):
    res = await client.post(
        "/api/v1/producers",
        json={"name": "Solar Farm", "energy_capacity": -5, "price_per_kwh": 2},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "INVALID_INPUT"
    assert error["context"]["field"] == "energy_capacity"


async def test_create_producer_rejects_float_price(client):
    res = await client.post(
        "/api/v1/producers",
        json={"name": "Solar Farm", "energy_capacity": 100, "price_per_kwh": 2.5},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["context"]["field"] == "price_per_kwh"
    assert [d["field"] for d in error["details"]] == ["price_per_kwh"]


async def test_create_producer_missing_field(client):
    res = await client.post("/api/v1/producers", json={"name": "Solar Farm"})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["context"]["field"] == "energy_capacity"
    assert {d["field"] for d in error["details"]} == {"energy_capacity", "price_per_kwh"}


async def test_list_and_get_producer(client, producer):
    listed = await client.get("/api/v1/producers")
    assert listed.status_code == 200
    assert [p["id"] for p in listed.json()] == [producer["id"]]

    single = await client.get(f"/api/v1/producers/{producer['id']}")
    assert single.json() == producer


async def test_get_unknown_producer_returns_404(client):
    res = await client.get("/api/v1/producers/nope")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RECORD_NOT_FOUND"


async def test_patch_producer_price_only(client, producer):
    res = await client.patch(
        f"/api/v1/producers/{producer['id']}", json={"price_per_kwh": 3},
    )
    assert res.status_code == 200
    assert res.json()["price_per_kwh"] == 3
    assert res.json()["energy_capacity"] == 100


async def test_patch_producer_capacity_below_available_returns_409(client, producer):
    res = await client.patch(
        f"/api/v1/producers/{producer['id']}", json={"energy_capacity": 10},
    )
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "INVARIANT_VIOLATION"


async def test_patch_producer_empty_body_rejected(client, producer):
    res = await client.patch(f"/api/v1/producers/{producer['id']}", json={})
    assert res.status_code == 400


async def test_producers_cannot_be_deleted(client, producer):
    res = await client.delete(f"/api/v1/producers/{producer['id']}")
    assert res.status_code == 405
