"""Unit tests for note and auth schemas."""

import uuid
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from notefeed.core.models import Note, NoteHistory, User
from notefeed.core.schemas.auth import SignupRequest
from notefeed.core.schemas.notes import (
    NoteCreate,
    NoteFeedResponse,
    NoteResponse,
    has_next_page,
)


class TestNoteCreate:
    def test_trims_title_and_content(self):
        note = NoteCreate(title="  A title  ", content="  Some content \n")
        assert note.title == "A title"
        assert note.content == "Some content"

    def test_rejects_short_values_after_trim(self):
        with pytest.raises(ValidationError) as exc:
            NoteCreate(title="  abc   ", content="Long enough content")
        assert exc.value.errors()[0]["loc"] == ("title",)

    def test_min_length_is_inclusive(self):
        NoteCreate(title="abcde", content="fghij")


class TestHasNext:
    @pytest.mark.parametrize(
        "total,page,per_page,expected",
        [(7, 1, 5, True), (7, 2, 5, False), (5, 1, 5, False), (0, 1, 5, False), (11, 2, 5, True)],
    )
    def test_has_next(self, total, page, per_page, expected):
        assert has_next_page(total, page, per_page) is expected

    def test_feed_response_uses_formula(self):
        resp = NoteFeedResponse.create(notes=[], total_items=7, page=1, per_page=5)
        assert resp.has_next is True
        assert resp.current_page == 1
        assert resp.total_items == 7


def _note_with_creator():
    creator = User(id=uuid.uuid4(), email="max@test.com", name="Max", password_hash="x")
    now = datetime.now(timezone.utc)
    note = Note(
        id=uuid.uuid4(),
        title="A title",
        content="Some content",
        creator_id=creator.id,
        created_at=now,
        updated_at=now,
    )
    note.creator = creator
    return note, creator


def test_note_response_includes_creator_info():
    note, creator = _note_with_creator()
    resp = NoteResponse.from_model(note)

    assert resp.creator.id == creator.id
    assert resp.creator.name == "Max"
    assert resp.note_history is None


def test_note_response_with_history():
    note, _ = _note_with_creator()
    history = NoteHistory(id=uuid.uuid4())
    history.append("New title", "New content")
    history.append("A title", "Some content")
    note.note_history = history

    resp = NoteResponse.from_model(note, with_history=True)
    assert [e.title for e in resp.note_history.history] == ["New title", "A title"]

    assert NoteResponse.from_model(note).note_history is None


class TestSignupRequest:
    def _payload(self, **overrides):
        data = {
            "email": "Test@Test.com",
            "name": "Max",
            "password": "tester1",
            "confirm_password": "tester1",
        }
        data.update(overrides)
        return data

    def test_valid_signup_normalizes_email(self):
        req = SignupRequest(**self._payload())
        assert req.email == "test@test.com"

    def test_password_must_be_alphanumeric(self):
        with pytest.raises(ValidationError):
            SignupRequest(**self._payload(password="tes ter!", confirm_password="tes ter!"))

    def test_password_min_length(self):
        with pytest.raises(ValidationError):
            SignupRequest(**self._payload(password="abc", confirm_password="abc"))

    def test_passwords_must_match(self):
        with pytest.raises(ValidationError) as exc:
            SignupRequest(**self._payload(confirm_password="tester2"))
        assert "Passwords have to match!" in str(exc.value)

    def test_invalid_email(self):
        with pytest.raises(ValidationError):
            SignupRequest(**self._payload(email="not-an-email"))
