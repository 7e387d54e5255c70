"""
Note schemas.

Request bodies for note create/update and the response shapes for single
notes, their revision logs and paginated feeds.
"""

import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

NOTE_FIELD_MIN_LENGTH = 5


class NoteCreate(BaseModel):
    """Note creation request. Values are trimmed before length checks."""

    title: str = Field(min_length=NOTE_FIELD_MIN_LENGTH, max_length=255, description="Note title")
    content: str = Field(min_length=NOTE_FIELD_MIN_LENGTH, description="Note content")

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "title": "Groceries for the week",
                "content": "Milk, eggs, bread and a lot of coffee.",
            }
        },
    )


class NoteUpdate(NoteCreate):
    """Note update request; both fields are replaced."""


class CreatorInfo(BaseModel):
    """Denormalized creator reference."""

    id: uuid.UUID
    name: str


class HistoryEntryResponse(BaseModel):
    date: datetime
    title: str
    content: str

    model_config = ConfigDict(from_attributes=True)


class NoteHistoryResponse(BaseModel):
    """Revision log, oldest append first."""

    id: uuid.UUID
    history: List[HistoryEntryResponse] = Field(default_factory=list)

    @classmethod
    def from_model(cls, history: Any) -> "NoteHistoryResponse":
        return cls(
            id=history.id,
            history=[HistoryEntryResponse.model_validate(e) for e in history.entries],
        )


class NoteResponse(BaseModel):
    """Note as returned to clients."""

    id: uuid.UUID = Field(description="Note unique identifier")
    title: str
    content: str
    image_url: Optional[str] = Field(default=None, description="Stored image reference")
    creator_id: uuid.UUID
    creator: Optional[CreatorInfo] = Field(default=None, description="Populated creator")
    note_history_id: Optional[uuid.UUID] = None
    note_history: Optional[NoteHistoryResponse] = Field(
        default=None, description="Revision log, included on single-note reads"
    )
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, note: Any, with_history: bool = False) -> "NoteResponse":
        creator = getattr(note, "creator", None)
        history = getattr(note, "note_history", None) if with_history else None
        return cls(
            id=note.id,
            title=note.title,
            content=note.content,
            image_url=note.image_url,
            creator_id=note.creator_id,
            creator=CreatorInfo(id=creator.id, name=creator.name) if creator else None,
            note_history_id=note.note_history_id,
            note_history=NoteHistoryResponse.from_model(history) if history is not None else None,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )


class NoteCreatedResponse(BaseModel):
    message: str = "Note created successfully!"
    note: NoteResponse
    creator: CreatorInfo


class NoteDetailResponse(BaseModel):
    message: str = "Note fetched."
    note: NoteResponse


class NoteUpdatedResponse(BaseModel):
    message: str = "Note updated!"
    note: NoteResponse
    history: NoteHistoryResponse


def has_next_page(total_items: int, page: int, per_page: int) -> bool:
    """True while items remain past the current page."""
    return total_items - page * per_page > 0


class NoteFeedResponse(BaseModel):
    """One page of notes, newest first."""

    message: str = "Fetched notes successfully."
    notes: List[NoteResponse]
    total_items: int
    current_page: int
    per_page: int
    has_next: bool

    @classmethod
    def create(
        cls, notes: List[NoteResponse], total_items: int, page: int, per_page: int, **extra
    ) -> "NoteFeedResponse":
        return cls(
            notes=notes,
            total_items=total_items,
            current_page=page,
            per_page=per_page,
            has_next=has_next_page(total_items, page, per_page),
            **extra,
        )


class NoteSearchResponse(NoteFeedResponse):
    """Feed page restricted to notes matching ``search_text``."""

    search_text: str = ""
