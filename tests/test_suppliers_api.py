"""Supplier API tests."""

import pytest

MISSING = "00000000-0000-0000-0000-000000000000"


@pytest.fixture
async def supplier_channel(channels, make_connection):
    conn = make_connection("supplier-listener")
    await channels.get("Suppliers").connect(conn)
    return conn


async def _create(client, category, **overrides):
    body = {
        "name": "Proveedor 1",
        "contact": 1,
        "address": "Direccion 1",
        "category_id": category["id"],
    }
    body.update(overrides)
    return await client.post("/api/v1/suppliers", json=body)


@pytest.mark.asyncio
async def test_create_supplier(client, category, supplier_channel):
    resp = await _create(client, category)
    assert resp.status_code == 200
    supplier = resp.json()
    assert supplier["name"] == "Proveedor 1"
    assert supplier["category"]["id"] == category["id"]
    assert "date_of_hire" in supplier

    [msg] = supplier_channel.messages()
    assert msg["entity"] == "Suppliers"
    assert msg["type"] == "CREATE"


@pytest.mark.asyncio
async def test_create_supplier_validation(client, category):
    resp = await _create(client, category, name="ab", contact=-3, address="x")
    assert resp.status_code == 400
    errors = resp.json()
    assert set(errors) >= {"name", "contact", "address"}


@pytest.mark.asyncio
async def test_create_supplier_unknown_category(client, supplier_channel):
    resp = await client.post(
        "/api/v1/suppliers",
        json={"name": "Proveedor X", "contact": 1, "address": "Calle", "category_id": MISSING},
    )
    assert resp.status_code == 404
    assert supplier_channel.sent == []


@pytest.mark.asyncio
async def test_update_supplier_partial(client, category, supplier_channel):
    created = (await _create(client, category)).json()

    resp = await client.put(
        f"/api/v1/suppliers/{created['id']}", json={"address": "Calle Mayor 5"}
    )
    assert resp.status_code == 200
    assert resp.json()["address"] == "Calle Mayor 5"
    assert resp.json()["name"] == "Proveedor 1"
    assert [m["type"] for m in supplier_channel.messages()] == ["CREATE", "UPDATE"]


@pytest.mark.asyncio
async def test_list_suppliers_by_name_and_address(client, category):
    await _create(client, category, name="Proveedor Norte", address="Bilbao")
    await _create(client, category, name="Proveedor Sur", address="Sevilla")

    resp = await client.get("/api/v1/suppliers?name=proveedor&address=sev")
    page = resp.json()
    assert [s["name"] for s in page["content"]] == ["Proveedor Sur"]


@pytest.mark.asyncio
async def test_delete_supplier(client, category, supplier_channel):
    created = (await _create(client, category)).json()

    resp = await client.delete(f"/api/v1/suppliers/{created['id']}")
    assert resp.status_code == 204
    assert supplier_channel.messages()[-1]["type"] == "DELETE"
    assert (await client.get(f"/api/v1/suppliers/{created['id']}")).status_code == 404
