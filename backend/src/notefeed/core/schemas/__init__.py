"""
Pydantic schemas for validating and documenting API requests and responses.

This package exposes the Pydantic models used across the application to
define input/output contracts for authentication, notes and common
responses (errors, acknowledgements and health checks).
"""

from .auth import LoginRequest, LoginResponse, SignupRequest, SignupResponse, UserProfileResponse
from .common import ErrorResponse, HealthCheckResponse, MessageResponse
from .notes import (
    CreatorInfo,
    HistoryEntryResponse,
    NoteCreate,
    NoteCreatedResponse,
    NoteDetailResponse,
    NoteFeedResponse,
    NoteHistoryResponse,
    NoteResponse,
    NoteSearchResponse,
    NoteUpdate,
    NoteUpdatedResponse,
)

__all__ = [
    # Auth schemas
    "SignupRequest",
    "SignupResponse",
    "LoginRequest",
    "LoginResponse",
    "UserProfileResponse",
    # Note schemas
    "NoteCreate",
    "NoteUpdate",
    "CreatorInfo",
    "HistoryEntryResponse",
    "NoteHistoryResponse",
    "NoteResponse",
    "NoteCreatedResponse",
    "NoteDetailResponse",
    "NoteUpdatedResponse",
    "NoteFeedResponse",
    "NoteSearchResponse",
    # Common schemas
    "ErrorResponse",
    "MessageResponse",
    "HealthCheckResponse",
]
