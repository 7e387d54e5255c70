"""Note repository for database operations."""

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import desc, func, or_, select
from sqlalchemy.orm import selectinload

from ..models.note import Note
from ..models.note_history import NoteHistory
from .base import BaseRepository

logger = logging.getLogger(__name__)


class NoteRepository(BaseRepository):
    """Repository for note database operations."""

    def _note_query(self):
        return select(Note).options(
            selectinload(Note.creator),
            selectinload(Note.note_history).selectinload(NoteHistory.entries),
        )

    async def create_note(self, note_data: dict) -> Note:
        """Create new note."""
        note = Note(**note_data)
        self.session.add(note)
        await self._commit()
        return await self.get_by_id(note.id)

    async def get_by_id(self, note_id: UUID) -> Optional[Note]:
        """Get note by ID with creator and revision log loaded."""
        stmt = (
            self._note_query()
            .where(Note.id == note_id)
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def save(self, note: Note) -> Note:
        """Write the note together with any staged revision log changes."""
        self.session.add(note)
        await self._commit()
        return await self.get_by_id(note.id)

    async def delete_note(self, note: Note) -> None:
        """Remove the note row. Its revision log is left in place."""
        note_id = note.id
        await self.session.delete(note)
        await self._commit()
        logger.debug(f"Deleted note row {note_id}")

    async def list_notes(self, page: int = 1, per_page: int = 5) -> Tuple[List[Note], int]:
        """All notes, newest first, one page at a time."""
        return await self._paginate(None, page, per_page)

    async def search_notes(
        self, search_text: str, page: int = 1, per_page: int = 5
    ) -> Tuple[List[Note], int]:
        """Notes whose title or content contains the text, ignoring case."""
        condition = None
        if search_text:
            condition = or_(
                Note.title.icontains(search_text, autoescape=True),
                Note.content.icontains(search_text, autoescape=True),
            )
        return await self._paginate(condition, page, per_page)

    async def _paginate(self, condition, page: int, per_page: int) -> Tuple[List[Note], int]:
        offset = (page - 1) * per_page

        count_stmt = select(func.count(Note.id))
        stmt = self._note_query()
        if condition is not None:
            count_stmt = count_stmt.where(condition)
            stmt = stmt.where(condition)

        total_result = await self._execute(count_stmt)
        total_count = total_result.scalar() or 0

        stmt = stmt.order_by(desc(Note.created_at), desc(Note.id)).offset(offset).limit(per_page)
        result = await self._execute(stmt)
        return list(result.scalars().all()), total_count
