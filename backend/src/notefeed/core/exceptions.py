"""
Application exceptions.

Every error the note core reports carries an ``ErrorKind`` tag; the HTTP
layer maps the tag to a status code (see ``exception_handlers``).
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorKind(str, Enum):
    """Tagged error kinds reported to callers."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    AUTHORIZATION = "authorization"
    AUTHENTICATION = "authentication"
    STORAGE = "storage"
    RATE_LIMITED = "rate_limited"


ERROR_STATUS: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.AUTHORIZATION: 403,
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.STORAGE: 500,
    ErrorKind.RATE_LIMITED: 429,
}


class NoteFeedError(Exception):
    """Base exception for all application errors."""

    kind: ErrorKind = ErrorKind.STORAGE
    default_message = "Internal error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return ERROR_STATUS[self.kind]

    @property
    def data(self) -> Any:
        """Structured payload for the error response body."""
        return None


class ValidationError(NoteFeedError):
    """Malformed or out-of-range input.

    ``violations`` is a list of ``{"field", "message", "value"}`` dicts.
    """

    kind = ErrorKind.VALIDATION
    default_message = "Validation failed, invalid data was entered!"

    def __init__(
        self, message: Optional[str] = None, violations: Optional[List[Dict[str, Any]]] = None
    ) -> None:
        self.violations = list(violations or [])
        super().__init__(message)

    @property
    def data(self) -> List[Dict[str, Any]]:
        return self.violations

    @classmethod
    def for_field(cls, field: str, message: str, value: Any = None) -> "ValidationError":
        return cls(violations=[{"field": field, "message": message, "value": value}])


class NotFoundError(NoteFeedError):
    """Referenced note or user does not exist."""

    kind = ErrorKind.NOT_FOUND
    default_message = "Could not find resource."


class AuthorizationError(NoteFeedError):
    """Requester is not allowed to touch the resource."""

    kind = ErrorKind.AUTHORIZATION
    default_message = "Not authorized!"


class AuthenticationError(NoteFeedError):
    """Missing, invalid or expired credentials."""

    kind = ErrorKind.AUTHENTICATION
    default_message = "Not authenticated."


class StorageError(NoteFeedError):
    """Backing persistence failed."""

    kind = ErrorKind.STORAGE
    default_message = "Storage operation failed."


class RateLimitError(NoteFeedError):
    """Client exceeded the request limit for the current window."""

    kind = ErrorKind.RATE_LIMITED
    default_message = "Too many requests, please try again later."
