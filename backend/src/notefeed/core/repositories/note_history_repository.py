"""Revision log repository."""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from ..models.note_history import NoteHistory
from .base import BaseRepository


class NoteHistoryRepository(BaseRepository):
    """Stages revision log writes; the caller's note save commits them."""

    async def get_by_id(self, history_id: UUID) -> Optional[NoteHistory]:
        stmt = (
            select(NoteHistory)
            .options(selectinload(NoteHistory.entries))
            .where(NoteHistory.id == history_id)
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def start_log(
        self, new_title: str, new_content: str, old_title: str, old_content: str
    ) -> NoteHistory:
        """Create the log written on a note's first edit.

        The incoming state goes in first and the replaced state second.
        """
        history = NoteHistory()
        history.append(new_title, new_content)
        history.append(old_title, old_content)
        self.session.add(history)
        await self._flush()
        return history

    async def append_entry(self, history: NoteHistory, title: str, content: str) -> NoteHistory:
        """Append the new state to an existing log."""
        history.append(title, content)
        self.session.add(history)
        await self._flush()
        return history
