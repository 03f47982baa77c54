"""Health check: always 200, mongodb field tracks the live ping result."""

from showroom.api.dependencies import get_mongo_manager
from showroom.main import app


async def test_health_reports_connected(client):
    res = await client.get("/api/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok", "mongodb": "connected"}


async def test_health_reports_disconnected_when_ping_fails(client, mongo_client):
    mongo_client.down = True

    res = await client.get("/api/health")

    assert res.status_code == 200
    assert res.json() == {"status": "ok", "mongodb": "disconnected"}


async def test_health_recovers_after_reconnect(client, mongo_client):
    mongo_client.down = True
    await client.get("/api/health")
    mongo_client.down = False

    res = await client.get("/api/health")

    assert res.json()["mongodb"] == "connected"


async def test_health_without_manager_reports_disconnected(client):
    app.dependency_overrides[get_mongo_manager] = lambda: None

    res = await client.get("/api/health")

    assert res.status_code == 200
    assert res.json()["mongodb"] == "disconnected"
