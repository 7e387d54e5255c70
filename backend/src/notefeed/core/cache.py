"""Listing cache for note feed pages.

The fixed key (``settings.notes_cache_key``) holds a generation counter.
Pages live as fields of a hash named ``<key>:<generation>``, so bumping the
counter invalidates every page at once. Writers must call
:meth:`NotesCache.invalidate` after each successful note create, update or
delete.

Readers take :meth:`generation` before querying the database and pass it to
:meth:`store_page`. A page read before a concurrent write therefore lands in
a hash no reader looks at anymore and simply expires.
"""

import json
import logging
from typing import Any, Dict, Optional

from ..config import get_settings
from .redis_client import RedisClient, get_redis_client

logger = logging.getLogger(__name__)


class NotesCache:
    """Invalidate-on-write cache for listing pages."""

    def __init__(
        self,
        redis_client: Optional[RedisClient] = None,
        key: Optional[str] = None,
        ttl_seconds: Optional[int] = None,
    ):
        settings = get_settings()
        self.redis_client = redis_client or get_redis_client()
        self.key = key or settings.notes_cache_key
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.notes_cache_ttl_seconds

    @staticmethod
    def page_field(page: int, per_page: int) -> str:
        return f"{page}:{per_page}"

    def pages_key(self, generation: int) -> str:
        return f"{self.key}:{generation}"

    async def generation(self) -> int:
        """Current cache generation; 0 before the first invalidation."""
        raw = await self.redis_client.get(self.key)
        if raw is None:
            return 0
        try:
            return int(raw)
        except ValueError:
            logger.warning(f"Unreadable cache generation '{raw}', using 0")
            return 0

    async def get_page(
        self, page: int, per_page: int, generation: Optional[int] = None
    ) -> Optional[Dict[str, Any]]:
        if generation is None:
            generation = await self.generation()
        raw = await self.redis_client.hget(
            self.pages_key(generation), self.page_field(page, per_page)
        )
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(f"Discarding unreadable cache entry for page {page}")
            return None

    async def store_page(
        self,
        page: int,
        per_page: int,
        payload: Dict[str, Any],
        generation: Optional[int] = None,
    ) -> bool:
        """Store a page under the generation it was read in."""
        if generation is None:
            generation = await self.generation()
        return await self.redis_client.hset(
            self.pages_key(generation),
            self.page_field(page, per_page),
            json.dumps(payload, default=str),
            expire=self.ttl_seconds,
        )

    async def invalidate(self) -> bool:
        """Drop every cached page by moving to a new generation."""
        generation = await self.redis_client.incr(self.key)
        if generation is None:
            return False
        await self.redis_client.delete(self.pages_key(generation - 1))
        logger.debug(f"Invalidated listing cache '{self.key}', generation {generation}")
        return True


_notes_cache: Optional[NotesCache] = None


def get_notes_cache() -> NotesCache:
    """FastAPI dependency returning the process listing cache."""
    global _notes_cache
    if _notes_cache is None:
        _notes_cache = NotesCache()
    return _notes_cache
