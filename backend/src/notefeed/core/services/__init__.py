"""
Service layer interfaces and implementations.
"""

from .interfaces import IAuthService, IHealthService, INoteService, IQueryService

from .auth_service import AuthService
from .note_service import NoteService
from .query_service import QueryService
from .health_service import HealthService

__all__ = [
    # Interfaces
    "IAuthService",
    "INoteService",
    "IQueryService",
    "IHealthService",

    # Implementations
    "AuthService",
    "NoteService",
    "QueryService",
    "HealthService",
]
