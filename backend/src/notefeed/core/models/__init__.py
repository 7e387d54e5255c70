"""
Database models for NoteFeed.

Models included:
    - User: account identified by email, owner of notes
    - Note: title/content/image note created by a user
    - NoteHistory / NoteHistoryEntry: append-only revision log of a note
"""

from .base import BaseModel
from .note import Note
from .note_history import NoteHistory, NoteHistoryEntry
from .user import User

__all__ = [
    "BaseModel",
    "User",
    "Note",
    "NoteHistory",
    "NoteHistoryEntry",
]
