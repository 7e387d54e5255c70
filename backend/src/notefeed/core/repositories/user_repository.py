"""User repository for database operations."""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import attributes as orm_attributes, selectinload

from ..exceptions import NotFoundError, StorageError, ValidationError
from ..models.note import Note
from ..models.user import User
from .base import BaseRepository

EMAIL_TAKEN_MESSAGE = "E-Mail address already exists!"


class UserRepository(BaseRepository):
    """Identity store: user records and their owned-note references."""

    async def create_user(self, user_data: dict) -> User:
        """Create new user; a taken email is a validation error on ``email``."""
        user = User(**user_data)
        self.session.add(user)
        try:
            await self._commit()
        except StorageError as e:
            if isinstance(e.__cause__, IntegrityError):
                raise ValidationError.for_field(
                    "email", EMAIL_TAKEN_MESSAGE, user_data.get("email")
                ) from e.__cause__
            raise
        orm_attributes.set_committed_value(user, "notes", [])
        return user

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID with owned notes loaded."""
        stmt = (
            select(User)
            .options(selectinload(User.notes))
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        stmt = select(User).options(selectinload(User.notes)).where(User.email == email)
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def is_email_taken(self, email: str) -> bool:
        """Check if an account already uses this email."""
        return await self.get_by_email(email) is not None

    async def find_user(self, user_id: UUID) -> User:
        """Get user by ID or raise NotFoundError."""
        user = await self.get_by_id(user_id)
        if not user:
            raise NotFoundError("Could not find user.")
        return user

    async def persist_user(self, user: User) -> User:
        """Write pending user changes."""
        self.session.add(user)
        await self._commit()
        return user

    async def add_note(self, user: User, note: Note) -> User:
        """Record a newly created note in the user's note set."""
        user = await self.find_user(user.id)
        if not user.owns(note.id):
            orm_attributes.set_committed_value(user, "notes", [*user.notes, note])
        return await self.persist_user(user)

    async def remove_note(self, user: User, note_id: UUID) -> User:
        """Drop a note id from the user's note set."""
        user = await self.find_user(user.id)
        remaining = [n for n in user.notes if n.id != note_id]
        orm_attributes.set_committed_value(user, "notes", remaining)
        return await self.persist_user(user)
