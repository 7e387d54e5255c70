"""Health endpoint tests; Redis is not connected in the test process."""


async def test_health_reports_degraded_without_redis(async_client):
    resp = await async_client.get("/api/health/")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "degraded"
    assert body["checks"]["database"]["connected"] is True
    assert body["checks"]["redis"]["connected"] is False


async def test_database_health(async_client):
    resp = await async_client.get("/api/health/database")

    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


async def test_root_endpoints(async_client):
    root = await async_client.get("/")
    api = await async_client.get("/api/")

    assert root.status_code == 200
    assert api.status_code == 200
