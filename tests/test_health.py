"""Health endpoint tests."""

import pytest


@pytest.mark.asyncio
async def test_health_reports_database_and_channels(unauthenticated_client, channels, make_connection):
    await channels.get("Product").connect(make_connection("a"))
    await channels.get("Product").connect(make_connection("b"))
    await channels.get("Client").connect(make_connection("c"))

    resp = await unauthenticated_client.get("/api/v1/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "healthy"
    assert body["database"] == "ok"
    assert body["channels"] == {
        "Product": 2,
        "Category": 0,
        "Suppliers": 0,
        "Employee": 0,
        "Client": 1,
    }
