"""Note service implementation."""

import logging
from typing import Any, Dict, Optional, Tuple, Union
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..background import SideEffectRunner, get_side_effect_runner
from ..cache import NotesCache
from ..exceptions import AuthorizationError, NotFoundError, StorageError
from ..images import ImageStorage
from ..models.note import Note
from ..models.note_history import NoteHistory
from ..notifications import INotificationSink, NoteEvent
from ..repositories.note_history_repository import NoteHistoryRepository
from ..repositories.note_repository import NoteRepository
from ..repositories.user_repository import UserRepository
from ..schemas.notes import NoteResponse
from .interfaces import INoteService

logger = logging.getLogger(__name__)


class NoteService(INoteService):
    """Note service implementation.

    Primary writes commit before any side effect runs. The listing cache is
    invalidated inline; notification and image release are handed to the
    side-effect runner and never fail the operation.
    """

    def __init__(
        self,
        session: AsyncSession,
        cache: Optional[NotesCache] = None,
        notifier: Optional[INotificationSink] = None,
        images: Optional[ImageStorage] = None,
        runner: Optional[SideEffectRunner] = None,
    ):
        self.session = session
        self.note_repo = NoteRepository(session)
        self.history_repo = NoteHistoryRepository(session)
        self.user_repo = UserRepository(session)
        self.cache = cache
        self.notifier = notifier
        self.images = images
        self.runner = runner or get_side_effect_runner()

    async def create_note(
        self, creator_id: UUID, title: str, content: str, image_url: Optional[str] = None
    ) -> Note:
        """Create new note and record it in the creator's note set."""
        if not creator_id:
            raise StorageError("Creating note failed: no creator given.")

        creator = await self.user_repo.find_user(creator_id)

        note = await self.note_repo.create_note(
            {
                "title": title,
                "content": content,
                "image_url": image_url,
                "creator_id": creator.id,
            }
        )
        await self.user_repo.add_note(creator, note)
        logger.info(f"Note created - {note.id}")

        await self._invalidate_cache()
        self._notify("create", self._serialize(note))
        return note

    async def get_note(self, note_id: UUID) -> Note:
        """Get note by ID with its revision log loaded."""
        note = await self.note_repo.get_by_id(note_id)
        if not note:
            raise NotFoundError("Could not find note.")
        return note

    async def update_note(
        self,
        note_id: UUID,
        requester_id: UUID,
        title: str,
        content: str,
        image_url: Optional[str] = None,
    ) -> Tuple[Note, NoteHistory]:
        """Update a note and append to its revision log.

        The first edit creates the log holding the new state followed by the
        replaced one; every later edit appends only the new state. The note
        and its log are committed together.
        """
        note = await self.get_note(note_id)
        if not note.is_owned_by(requester_id):
            logger.warning(f"User {requester_id} tried to update note {note_id}")
            raise AuthorizationError()

        replaced_image = None
        if image_url and note.image_url and image_url != note.image_url:
            replaced_image = note.image_url

        if note.note_history is None:
            history = await self.history_repo.start_log(title, content, note.title, note.content)
            note.note_history = history
        else:
            await self.history_repo.append_entry(note.note_history, title, content)

        note.title = title
        note.content = content
        if image_url:
            note.image_url = image_url

        note = await self.note_repo.save(note)
        logger.info(f"Note updated - {note.id} ({len(note.note_history)} revisions)")

        if replaced_image:
            self._release_image(replaced_image)
        await self._invalidate_cache()
        self._notify("update", self._serialize(note))
        return note, note.note_history

    async def delete_note(self, note_id: UUID, requester_id: UUID) -> Note:
        """Delete a note; its revision log is kept."""
        note = await self.get_note(note_id)
        if not note.is_owned_by(requester_id):
            logger.warning(f"User {requester_id} tried to delete note {note_id}")
            raise AuthorizationError()

        creator = await self.user_repo.find_user(note.creator_id)
        image_url = note.image_url

        await self.note_repo.delete_note(note)
        await self.user_repo.remove_note(creator, note_id)
        logger.info(f"Note deleted - {note_id}")

        if image_url:
            self._release_image(image_url)
        await self._invalidate_cache()
        self._notify("delete", note_id)
        return note

    @staticmethod
    def _serialize(note: Note) -> Dict[str, Any]:
        return NoteResponse.from_model(note).model_dump(mode="json")

    async def _invalidate_cache(self) -> None:
        if self.cache is None:
            return
        try:
            await self.cache.invalidate()
        except Exception as e:
            logger.warning(f"Listing cache invalidation failed: {e}")

    def _notify(self, action: str, note: Union[Dict[str, Any], UUID]) -> None:
        if self.notifier is None:
            return
        event = NoteEvent(action=action, note=note)
        self.runner.spawn(self.notifier.publish(event), name=f"notify-{action}")

    def _release_image(self, image_url: str) -> None:
        if self.images is None:
            return
        self.runner.spawn(self.images.release(image_url), name="release-image")
