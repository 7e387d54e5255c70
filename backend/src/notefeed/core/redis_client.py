"""Redis client for the listing cache and rate limiting."""

import logging
from typing import Optional

import redis.asyncio as redis

from ..config import get_settings

logger = logging.getLogger(__name__)


class RedisClient:
    """Thin async Redis wrapper.

    Every operation degrades to a neutral result (``None``/``False``/``0``)
    when Redis is not connected or a command fails, so callers treat Redis
    as an optional accelerator.
    """

    def __init__(self, url: Optional[str] = None):
        self.settings = get_settings()
        self.url = url or self.settings.redis_url
        self.redis: Optional[redis.Redis] = None

    @property
    def connected(self) -> bool:
        return self.redis is not None

    async def connect(self) -> None:
        """Connect to Redis."""
        try:
            client = redis.from_url(
                self.url,
                max_connections=self.settings.redis_max_connections,
                decode_responses=True,
            )
            await client.ping()
            self.redis = client
            logger.info("Connected to Redis successfully")
        except Exception as e:
            self.redis = None
            logger.error(f"Failed to connect to Redis: {e}")
            raise

    async def disconnect(self) -> None:
        """Disconnect from Redis."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            logger.info("Disconnected from Redis")

    async def ping(self) -> bool:
        if not self.redis:
            return False
        try:
            return bool(await self.redis.ping())
        except Exception as e:
            logger.error(f"Redis PING error: {e}")
            return False

    async def get(self, key: str) -> Optional[str]:
        """Get value from Redis."""
        if not self.redis:
            return None
        try:
            return await self.redis.get(key)
        except Exception as e:
            logger.error(f"Redis GET error for key {key}: {e}")
            return None

    async def incr(self, key: str) -> Optional[int]:
        """Increment a counter; ``None`` when Redis is unavailable."""
        if not self.redis:
            return None
        try:
            return int(await self.redis.incr(key))
        except Exception as e:
            logger.error(f"Redis INCR error for key {key}: {e}")
            return None

    async def delete(self, key: str) -> bool:
        """Delete key from Redis."""
        if not self.redis:
            return False
        try:
            result = await self.redis.delete(key)
            return result > 0
        except Exception as e:
            logger.error(f"Redis DELETE error for key {key}: {e}")
            return False

    async def hget(self, key: str, field: str) -> Optional[str]:
        """Get one field of a hash."""
        if not self.redis:
            return None
        try:
            return await self.redis.hget(key, field)
        except Exception as e:
            logger.error(f"Redis HGET error for key {key}: {e}")
            return None

    async def hset(self, key: str, field: str, value: str, expire: Optional[int] = None) -> bool:
        """Set one field of a hash; ``expire`` applies to the whole hash."""
        if not self.redis:
            return False
        try:
            async with self.redis.pipeline() as pipe:
                await pipe.hset(key, field, value)
                if expire:
                    await pipe.expire(key, expire)
                await pipe.execute()
            return True
        except Exception as e:
            logger.error(f"Redis HSET error for key {key}: {e}")
            return False

    # Rate limiting
    async def increment_rate_limit(self, key: str, expire: int = 60) -> int:
        """Increment a fixed-window counter; the window starts on the first hit."""
        try:
            if not self.redis:
                return 0
            async with self.redis.pipeline() as pipe:
                await pipe.incr(key)
                await pipe.expire(key, expire, nx=True)
                results = await pipe.execute()
                return results[0] if results else 0
        except Exception as e:
            logger.error(f"Rate limit error for key {key}: {e}")
            return 0


# Singleton instance
_redis_client: Optional[RedisClient] = None


def get_redis_client() -> RedisClient:
    """Get Redis client singleton."""
    global _redis_client
    if _redis_client is None:
        _redis_client = RedisClient()
    return _redis_client
