"""Per-client request rate limiting backed by Redis."""

import logging
from typing import Optional

from ..config import get_settings
from ..core.exception_handlers import error_response
from ..core.exceptions import RateLimitError
from ..core.redis_client import RedisClient, get_redis_client

logger = logging.getLogger(__name__)


class RateLimitMiddleware:
    """ASGI middleware enforcing a fixed window request limit per client IP.

    Counts live in Redis under ``ratelimit:<ip>`` and expire with the
    window. When Redis is unavailable every request is let through.
    """

    def __init__(
        self,
        app,
        redis_client: Optional[RedisClient] = None,
        max_requests: Optional[int] = None,
        window_seconds: Optional[int] = None,
    ):
        settings = get_settings()
        self.app = app
        self.redis_client = redis_client
        self.max_requests = max_requests or settings.rate_limit_requests
        self.window_seconds = window_seconds or settings.rate_limit_window_minutes * 60
        self.enabled = settings.rate_limit_enabled

    async def __call__(self, scope, receive, send):
        if not self.enabled or scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        client = scope.get("client")
        client_ip = client[0] if client else "unknown"
        redis_client = self.redis_client or get_redis_client()

        count = await redis_client.increment_rate_limit(
            f"ratelimit:{client_ip}", expire=self.window_seconds
        )
        if count > self.max_requests:
            logger.warning(f"Rate limit exceeded for {client_ip} ({count} requests)")
            response = error_response(RateLimitError())
            response.headers["Retry-After"] = str(self.window_seconds)
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)
