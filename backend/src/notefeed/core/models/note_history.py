"""
Revision log models.

A ``NoteHistory`` is the append-only edit log of a single note. Entries keep
their insertion order through ``position`` and are never modified once
flushed.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, event
from sqlalchemy.orm import Mapped, attributes as orm_attributes, mapped_column, relationship

from .base import BaseModel, utcnow
from .types import GUID


class NoteHistory(BaseModel):
    """Ordered revision log of one note."""

    __tablename__ = "note_histories"

    entries: Mapped[List["NoteHistoryEntry"]] = relationship(
        "NoteHistoryEntry",
        back_populates="note_history",
        cascade="all, delete-orphan",
        order_by="NoteHistoryEntry.position",
        lazy="selectin",
    )

    def __len__(self) -> int:
        return len(self.entries)

    def append(self, title: str, content: str, date: Optional[datetime] = None) -> "NoteHistoryEntry":
        """Add a snapshot at the end of the log."""
        entry = NoteHistoryEntry(
            position=len(self.entries),
            title=title,
            content=content,
            date=date or utcnow(),
        )
        self.entries.append(entry)
        return entry


class NoteHistoryEntry(BaseModel):
    """Immutable (title, content) snapshot inside a revision log."""

    __tablename__ = "note_history_entries"

    note_history_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("note_histories.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    note_history: Mapped["NoteHistory"] = relationship("NoteHistory", back_populates="entries")

    __table_args__ = (
        UniqueConstraint("note_history_id", "position", name="uq_note_history_entry_position"),
    )

    def __repr__(self) -> str:
        return f"<NoteHistoryEntry(position={self.position}, title='{self.title}')>"


# New logs start with an empty, already-loaded collection so appending
# before the first flush never triggers a lazy load.
@event.listens_for(NoteHistory, "init", propagate=True)
def _init_history_entries(target, args, kwargs):
    if "entries" not in kwargs:
        orm_attributes.set_committed_value(target, "entries", [])


@event.listens_for(NoteHistoryEntry, "before_update")
def _entries_are_immutable(mapper, connection, target):
    raise ValueError("Revision entries cannot be modified once written")
