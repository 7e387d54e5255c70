"""Signup, login and profile tests."""

import uuid

import pytest

from notefeed.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from notefeed.core.models.user import DEFAULT_BIO
from notefeed.core.schemas.auth import LoginRequest, SignupRequest
from notefeed.core.services import AuthService
from notefeed.security.jwt import get_user_id_from_token


def _signup(email="test@test.com", password="tester1"):
    return SignupRequest(email=email, name="Max", password=password, confirm_password=password)


async def test_signup_hashes_password(test_session):
    user = await AuthService(test_session).signup(_signup())

    assert user.email == "test@test.com"
    assert user.bio == DEFAULT_BIO
    assert user.password_hash != "tester1"


async def test_signup_duplicate_email(test_session):
    service = AuthService(test_session)
    await service.signup(_signup())

    with pytest.raises(ValidationError) as exc:
        await service.signup(_signup(email="TEST@test.com"))
    assert exc.value.violations[0]["field"] == "email"
    assert exc.value.violations[0]["message"] == "E-Mail address already exists!"


async def test_signup_racing_a_duplicate_still_reports_email(test_session, monkeypatch):
    service = AuthService(test_session)
    await service.signup(_signup())

    async def not_taken(email):
        return False

    monkeypatch.setattr(service.user_repo, "is_email_taken", not_taken)

    with pytest.raises(ValidationError) as exc:
        await service.signup(_signup())
    assert exc.value.violations[0]["field"] == "email"
    assert exc.value.status_code == 422


async def test_login_returns_token_for_user(test_session):
    service = AuthService(test_session)
    user = await service.signup(_signup())

    result = await service.login(LoginRequest(email="test@test.com", password="tester1"))

    assert result.user_id == user.id
    assert get_user_id_from_token(result.token) == user.id
    assert result.expires_in == 3600


async def test_login_unknown_email(test_session):
    with pytest.raises(AuthenticationError):
        await AuthService(test_session).login(LoginRequest(email="nobody@test.com", password="tester1"))


async def test_login_wrong_password(test_session):
    service = AuthService(test_session)
    await service.signup(_signup())

    with pytest.raises(AuthenticationError) as exc:
        await service.login(LoginRequest(email="test@test.com", password="wrong1"))
    assert exc.value.message == "Wrong password!"


async def test_profile(test_session, test_user, make_note):
    note = await make_note(test_user.id)

    profile = await AuthService(test_session).get_profile(test_user.id)
    assert profile.name == "Max"
    assert profile.note_ids == [note.id]

    with pytest.raises(NotFoundError):
        await AuthService(test_session).get_profile(uuid.uuid4())
