"""Unit tests for security/jwt.py"""

import uuid
from datetime import timedelta

from jose import jwt

from notefeed.security import jwt as jwt_module
from notefeed.security.jwt import create_access_token, decode_access_token, get_user_id_from_token


class DummySettings:
    secret_key = "test-secret"
    algorithm = "HS256"
    access_token_expire_minutes = 60


def test_create_and_decode_access_token(monkeypatch):
    monkeypatch.setattr(jwt_module, "get_settings", lambda: DummySettings())

    sub = str(uuid.uuid4())
    token = create_access_token({"sub": sub}, expires_delta=timedelta(minutes=5))
    assert isinstance(token, str)

    payload = decode_access_token(token)
    assert payload is not None
    assert payload["sub"] == sub
    assert payload["type"] == "access"
    assert "jti" in payload


def test_decode_access_token_invalid_signature(monkeypatch):
    monkeypatch.setattr(jwt_module, "get_settings", lambda: DummySettings())
    token = jwt.encode({"sub": "x", "type": "access"}, "other-secret", algorithm="HS256")

    assert decode_access_token(token) is None


def test_expired_token_is_rejected(monkeypatch):
    monkeypatch.setattr(jwt_module, "get_settings", lambda: DummySettings())
    token = create_access_token({"sub": str(uuid.uuid4())}, expires_delta=timedelta(seconds=-5))

    assert decode_access_token(token) is None


def test_wrong_token_type_is_rejected(monkeypatch):
    monkeypatch.setattr(jwt_module, "get_settings", lambda: DummySettings())
    token = jwt.encode({"sub": "x", "type": "refresh"}, DummySettings.secret_key, algorithm="HS256")

    assert decode_access_token(token) is None


def test_get_user_id_from_token(monkeypatch):
    monkeypatch.setattr(jwt_module, "get_settings", lambda: DummySettings())
    uid = uuid.uuid4()

    assert get_user_id_from_token(create_access_token({"sub": str(uid)})) == uid
    assert get_user_id_from_token(create_access_token({"sub": "not-a-uuid"})) is None
    assert get_user_id_from_token(create_access_token({"email": "a@test.com"})) is None
    assert get_user_id_from_token("garbage") is None
