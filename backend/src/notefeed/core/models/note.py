# Note model for user content
import uuid
from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from .base import BaseModel
from .types import GUID

if TYPE_CHECKING:
    from .note_history import NoteHistory
    from .user import User


class Note(BaseModel):
    """Short text note with an optional image."""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # set once at creation, see _creator_is_immutable
    creator_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    # created lazily on the first edit; survives note deletion
    note_history_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        GUID(), ForeignKey("note_histories.id", ondelete="SET NULL"), nullable=True
    )

    creator: Mapped["User"] = relationship(
        "User",
        foreign_keys=[creator_id],
        lazy="selectin",
        doc="User who created and owns this note",
    )

    note_history: Mapped[Optional["NoteHistory"]] = relationship(
        "NoteHistory",
        foreign_keys=[note_history_id],
        lazy="selectin",
        doc="Revision log, absent until the first update",
    )

    __table_args__ = (
        Index("idx_notes_created_at", "created_at"),
        Index("idx_notes_creator_id", "creator_id"),
    )

    def __repr__(self) -> str:
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Note(title='{truncated}', creator_id={self.creator_id})>"

    @validates("creator_id")
    def _creator_is_immutable(self, key, value):
        current = self.__dict__.get("creator_id")
        if current is not None and value != current:
            raise ValueError("Note creator cannot be reassigned")
        return value

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        """Check if this note was created by the given user."""
        return self.creator_id == user_id
