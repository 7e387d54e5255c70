"""Feed listing and search service."""

import logging
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ..cache import NotesCache
from ..repositories.note_repository import NoteRepository
from ..schemas.notes import NoteFeedResponse, NoteResponse, NoteSearchResponse
from .interfaces import IQueryService

logger = logging.getLogger(__name__)


class QueryService(IQueryService):
    """Read-only pagination and substring search over all notes.

    Listing pages are served from the listing cache when present; search
    results always come from the database.
    """

    def __init__(self, session: AsyncSession, cache: Optional[NotesCache] = None):
        self.session = session
        self.note_repo = NoteRepository(session)
        self.cache = cache
        self.settings = get_settings()

    def _page_bounds(self, page: int, per_page: Optional[int]) -> Tuple[int, int]:
        if page < 1:
            page = 1
        if per_page is None or per_page < 1:
            per_page = self.settings.default_page_size
        return page, min(per_page, self.settings.max_page_size)

    async def list_notes(self, page: int = 1, per_page: Optional[int] = None) -> NoteFeedResponse:
        """List notes, newest first."""
        page, per_page = self._page_bounds(page, per_page)

        generation = await self._cache_generation()
        if generation is not None:
            cached = await self._cached_page(page, per_page, generation)
            if cached is not None:
                return cached

        notes, total_count = await self.note_repo.list_notes(page, per_page)
        response = NoteFeedResponse.create(
            notes=[NoteResponse.from_model(note) for note in notes],
            total_items=total_count,
            page=page,
            per_page=per_page,
        )

        if generation is not None:
            try:
                await self.cache.store_page(
                    page, per_page, response.model_dump(mode="json"), generation=generation
                )
            except Exception as e:
                logger.warning(f"Failed to cache feed page {page}: {e}")
        return response

    async def search_notes(
        self, search_text: str, page: int = 1, per_page: Optional[int] = None
    ) -> NoteSearchResponse:
        """Notes whose title or content contains the text, ignoring case."""
        page, per_page = self._page_bounds(page, per_page)
        search_text = search_text or ""

        notes, total_count = await self.note_repo.search_notes(search_text, page, per_page)
        logger.debug(f"Search '{search_text}' matched {total_count} notes")
        return NoteSearchResponse.create(
            notes=[NoteResponse.from_model(note) for note in notes],
            total_items=total_count,
            page=page,
            per_page=per_page,
            search_text=search_text,
        )

    async def _cache_generation(self) -> Optional[int]:
        """Generation read before the database; ``None`` skips the cache."""
        if self.cache is None:
            return None
        try:
            return await self.cache.generation()
        except Exception as e:
            logger.warning(f"Listing cache generation read failed: {e}")
            return None

    async def _cached_page(
        self, page: int, per_page: int, generation: int
    ) -> Optional[NoteFeedResponse]:
        try:
            payload = await self.cache.get_page(page, per_page, generation=generation)
        except Exception as e:
            logger.warning(f"Listing cache read failed: {e}")
            return None
        if payload is None:
            return None
        return NoteFeedResponse.model_validate(payload)
