"""
Service interfaces for the NoteFeed application.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple
from uuid import UUID

from ..models.note import Note
from ..models.note_history import NoteHistory
from ..models.user import User
from ..schemas.auth import LoginRequest, LoginResponse, SignupRequest, UserProfileResponse
from ..schemas.common import HealthCheckResponse
from ..schemas.notes import NoteFeedResponse, NoteSearchResponse


class IAuthService(ABC):
    """Auth service for user management."""

    @abstractmethod
    async def signup(self, request: SignupRequest) -> User:
        """Register new user."""
        pass

    @abstractmethod
    async def login(self, request: LoginRequest) -> LoginResponse:
        """Check credentials and issue an access token."""
        pass

    @abstractmethod
    async def get_profile(self, user_id: UUID) -> UserProfileResponse:
        """Get user by ID."""
        pass


class INoteService(ABC):
    """Note lifecycle: create, read, update with revision logging, delete."""

    @abstractmethod
    async def create_note(
        self, creator_id: UUID, title: str, content: str, image_url: Optional[str] = None
    ) -> Note:
        """Create new note."""
        pass

    @abstractmethod
    async def get_note(self, note_id: UUID) -> Note:
        """Get note by ID with its revision log."""
        pass

    @abstractmethod
    async def update_note(
        self,
        note_id: UUID,
        requester_id: UUID,
        title: str,
        content: str,
        image_url: Optional[str] = None,
    ) -> Tuple[Note, NoteHistory]:
        """Update a note owned by the requester and log the revision."""
        pass

    @abstractmethod
    async def delete_note(self, note_id: UUID, requester_id: UUID) -> Note:
        """Delete a note owned by the requester."""
        pass


class IQueryService(ABC):
    """Read-only listing and search over all notes."""

    @abstractmethod
    async def list_notes(self, page: int = 1, per_page: Optional[int] = None) -> NoteFeedResponse:
        """List notes, newest first."""
        pass

    @abstractmethod
    async def search_notes(
        self, search_text: str, page: int = 1, per_page: Optional[int] = None
    ) -> NoteSearchResponse:
        """Case-insensitive substring search on title and content."""
        pass


class IHealthService(ABC):
    """Health check service."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
        pass

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Check DB connection."""
        pass

    @abstractmethod
    async def check_redis_health(self) -> Dict[str, Any]:
        """Check Redis connection."""
        pass
