"""
User model for authentication and note ownership.
"""

import uuid
from typing import TYPE_CHECKING, List

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel

if TYPE_CHECKING:
    from .note import Note

DEFAULT_BIO = "I am new!"


class User(BaseModel):
    """User account, identified by a unique email."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    bio: Mapped[str] = mapped_column(Text, default=DEFAULT_BIO, nullable=False)

    # Owned notes. Ownership lives in notes.creator_id; this collection is
    # read-only and must be loaded explicitly. UserRepository.add_note and
    # remove_note keep the loaded copy in sync.
    notes: Mapped[List["Note"]] = relationship(
        "Note",
        primaryjoin="User.id == Note.creator_id",
        viewonly=True,
        lazy="raise",
        order_by="Note.created_at",
    )

    def __repr__(self) -> str:
        return f"<User(email='{self.email}')>"

    @property
    def note_ids(self) -> List[uuid.UUID]:
        """IDs of notes created by this user."""
        return [note.id for note in self.notes]

    def owns(self, note_id: uuid.UUID) -> bool:
        return note_id in self.note_ids
