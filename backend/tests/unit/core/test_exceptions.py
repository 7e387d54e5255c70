"""Unit tests for the application error taxonomy."""

import pytest

from notefeed.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ErrorKind,
    NoteFeedError,
    NotFoundError,
    RateLimitError,
    StorageError,
    ValidationError,
)


@pytest.mark.parametrize(
    "error_cls,kind,status",
    [
        (ValidationError, ErrorKind.VALIDATION, 422),
        (NotFoundError, ErrorKind.NOT_FOUND, 404),
        (AuthorizationError, ErrorKind.AUTHORIZATION, 403),
        (AuthenticationError, ErrorKind.AUTHENTICATION, 401),
        (StorageError, ErrorKind.STORAGE, 500),
        (RateLimitError, ErrorKind.RATE_LIMITED, 429),
    ],
)
def test_kind_and_status(error_cls, kind, status):
    err = error_cls()
    assert isinstance(err, NoteFeedError)
    assert err.kind is kind
    assert err.status_code == status
    assert err.message


def test_custom_message_wins():
    err = NotFoundError("Could not find note.")
    assert err.message == "Could not find note."
    assert str(err) == "Could not find note."


def test_validation_error_carries_violations():
    err = ValidationError.for_field("email", "E-Mail address already exists!", "a@test.com")

    assert err.message == "Validation failed, invalid data was entered!"
    assert err.data == [
        {"field": "email", "message": "E-Mail address already exists!", "value": "a@test.com"}
    ]


def test_non_validation_errors_have_no_payload():
    assert AuthorizationError().data is None
