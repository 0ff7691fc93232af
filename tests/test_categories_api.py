"""Category API tests."""

import pytest

MISSING = "00000000-0000-0000-0000-000000000000"


@pytest.fixture
async def category_channel(channels, make_connection):
    conn = make_connection("category-listener")
    await channels.get("Category").connect(conn)
    return conn


@pytest.mark.asyncio
async def test_create_category_uppercases_name(client, category_channel):
    resp = await client.post("/api/v1/categories", json={"name": "sobremesa"})
    assert resp.status_code == 200
    cat = resp.json()
    assert cat["name"] == "SOBREMESA"
    assert cat["is_deleted"] is False

    [msg] = category_channel.messages()
    assert msg["entity"] == "Category"
    assert msg["type"] == "CREATE"
    assert msg["data"]["name"] == "SOBREMESA"


@pytest.mark.asyncio
async def test_create_category_duplicate_name(client, category, category_channel):
    resp = await client.post("/api/v1/categories", json={"name": "Portatiles"})
    assert resp.status_code == 409
    assert category_channel.sent == []


@pytest.mark.asyncio
async def test_create_category_name_too_short(client):
    resp = await client.post("/api/v1/categories", json={"name": "ab"})
    assert resp.status_code == 400
    assert "name" in resp.json()


@pytest.mark.asyncio
async def test_list_categories_filters(client):
    for name in ("ratones", "otros", "placas base"):
        await client.post("/api/v1/categories", json={"name": name})
    otros = (await client.get("/api/v1/categories?name=otr")).json()
    assert [c["name"] for c in otros["content"]] == ["OTROS"]

    everything = (await client.get("/api/v1/categories")).json()
    assert [c["name"] for c in everything["content"]] == ["OTROS", "PLACAS BASE", "RATONES"]


@pytest.mark.asyncio
async def test_soft_delete_category_via_update(client, category, category_channel):
    resp = await client.put(
        f"/api/v1/categories/{category['id']}", json={"is_deleted": True}
    )
    assert resp.status_code == 200
    assert resp.json()["is_deleted"] is True
    assert category_channel.messages()[-1]["type"] == "UPDATE"

    deleted = (await client.get("/api/v1/categories?is_deleted=true")).json()
    assert [c["id"] for c in deleted["content"]] == [category["id"]]


@pytest.mark.asyncio
async def test_delete_category_in_use_is_conflict(client, category, category_channel):
    await client.post(
        "/api/v1/products",
        json={"name": "Portatil", "price": 800, "category_id": category["id"]},
    )

    resp = await client.delete(f"/api/v1/categories/{category['id']}")
    assert resp.status_code == 409
    assert category_channel.sent == []


@pytest.mark.asyncio
async def test_delete_unused_category(client, category, category_channel):
    resp = await client.delete(f"/api/v1/categories/{category['id']}")
    assert resp.status_code == 204
    [msg] = category_channel.messages()
    assert msg["type"] == "DELETE"
    assert msg["data"]["name"] == "PORTATILES"


@pytest.mark.asyncio
async def test_get_category_404(client):
    resp = await client.get(f"/api/v1/categories/{MISSING}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_rename_category_refreshes_cached_products_and_suppliers(client, category, cache):
    product = (
        await client.post(
            "/api/v1/products",
            json={"name": "Portatil", "price": 800, "category_id": category["id"]},
        )
    ).json()
    supplier = (
        await client.post(
            "/api/v1/suppliers",
            json={"name": "Proveedor 1", "contact": 1, "address": "Calle", "category_id": category["id"]},
        )
    ).json()
    await client.get(f"/api/v1/products/{product['id']}")
    assert (await cache.get("products", product["id"]))["category"]["name"] == "PORTATILES"

    resp = await client.put(f"/api/v1/categories/{category['id']}", json={"name": "renamed"})
    assert resp.status_code == 200

    fresh = (await client.get(f"/api/v1/products/{product['id']}")).json()
    assert fresh["category"]["name"] == "RENAMED"
    fresh = (await client.get(f"/api/v1/suppliers/{supplier['id']}")).json()
    assert fresh["category"]["name"] == "RENAMED"
