"""Unit tests for the Redis-backed rate limit middleware."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from notefeed.middleware.rate_limit import RateLimitMiddleware


class CountingRedis:
    """Fixed window counter stand-in."""

    def __init__(self, available: bool = True):
        self.counts = {}
        self.expiries = {}
        self.available = available

    async def increment_rate_limit(self, key, expire=60):
        if not self.available:
            return 0
        self.counts[key] = self.counts.get(key, 0) + 1
        self.expiries.setdefault(key, expire)
        return self.counts[key]


def build_client(redis_client, max_requests=3) -> TestClient:
    app = FastAPI()

    @app.get("/ping")
    async def ping():
        return {"ok": True}

    app.add_middleware(
        RateLimitMiddleware, redis_client=redis_client, max_requests=max_requests, window_seconds=900
    )
    return TestClient(app)


def test_requests_over_limit_get_429(monkeypatch):
    from notefeed.config import settings

    monkeypatch.setattr(settings, "rate_limit_enabled", True)
    redis_client = CountingRedis()
    client = build_client(redis_client)

    statuses = [client.get("/ping").status_code for _ in range(4)]

    assert statuses == [200, 200, 200, 429]
    blocked = client.get("/ping")
    assert blocked.json()["kind"] == "rate_limited"
    assert blocked.headers["Retry-After"] == "900"
    assert list(redis_client.expiries.values()) == [900]


def test_fails_open_without_redis(monkeypatch):
    from notefeed.config import settings

    monkeypatch.setattr(settings, "rate_limit_enabled", True)
    client = build_client(CountingRedis(available=False), max_requests=1)

    assert all(client.get("/ping").status_code == 200 for _ in range(3))


def test_disabled_limiter_never_counts(monkeypatch):
    from notefeed.config import settings

    monkeypatch.setattr(settings, "rate_limit_enabled", False)
    redis_client = CountingRedis()
    client = build_client(redis_client, max_requests=1)

    assert client.get("/ping").status_code == 200
    assert client.get("/ping").status_code == 200
    assert redis_client.counts == {}
