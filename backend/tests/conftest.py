"""Shared pytest fixtures configured to use SQLite in-memory for unit tests."""

import logging
import os
import tempfile
from datetime import datetime, timedelta, timezone
from uuid import UUID

# Must be set before notefeed is imported: settings are read once at import.
_TEST_ROOT = tempfile.mkdtemp(prefix="notefeed-tests-")
os.environ.setdefault("NOTEFEED_SKIP_LIFESPAN_DB", "1")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_DIR", os.path.join(_TEST_ROOT, "logs"))
os.environ.setdefault("IMAGE_DIR", os.path.join(_TEST_ROOT, "images"))
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from notefeed.core.background import SideEffectRunner, get_side_effect_runner
from notefeed.core.cache import get_notes_cache
from notefeed.core.images import ImageStorage, get_image_storage
from notefeed.core.models import BaseModel
from notefeed.core.notifications import NoteEvent, get_notifier
from notefeed.core.repositories import NoteRepository, UserRepository
from notefeed.core.services import NoteService
from notefeed.database import get_db_session
from notefeed.main import app
from notefeed.security.jwt import create_access_token
from notefeed.security.password import hash_password

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

TEST_PASSWORD = "tester1"


class FakeNotifier:
    """Notification sink that records events instead of broadcasting."""

    def __init__(self, fail: bool = False):
        self.events = []
        self.fail = fail
        self.manager = None

    async def publish(self, event: NoteEvent) -> None:
        if self.fail:
            raise RuntimeError("broadcast down")
        self.events.append(event)

    def actions(self):
        return [e.action for e in self.events]


class FakeCache:
    """In-memory stand-in for NotesCache.

    ``pages`` holds the current generation only; stores made under an older
    generation are dropped.
    """

    def __init__(self, fail: bool = False):
        self.pages = {}
        self.current = 0
        self.invalidations = 0
        self.fail = fail

    async def generation(self):
        if self.fail:
            raise RuntimeError("cache down")
        return self.current

    async def get_page(self, page, per_page, generation=None):
        if self.fail:
            raise RuntimeError("cache down")
        if generation not in (None, self.current):
            return None
        return self.pages.get((page, per_page))

    async def store_page(self, page, per_page, payload, generation=None):
        if self.fail:
            raise RuntimeError("cache down")
        if generation not in (None, self.current):
            return False
        self.pages[(page, per_page)] = payload
        return True

    async def invalidate(self):
        self.invalidations += 1
        if self.fail:
            raise RuntimeError("cache down")
        self.current += 1
        self.pages.clear()
        return True


class FakeImages:
    """Image storage double recording released references."""

    def __init__(self, fail: bool = False):
        self.released = []
        self.fail = fail

    async def release(self, reference: str) -> bool:
        if self.fail:
            raise OSError("disk gone")
        self.released.append(reference)
        return True


@pytest.fixture(autouse=True)
def _propagate_app_logs(monkeypatch):
    # caplog listens on the root logger
    monkeypatch.setattr(logging.getLogger("notefeed"), "propagate", True)


@pytest.fixture
async def test_engine():
    """Fresh SQLite in-memory engine per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,  # keep the same memory DB across connections
        connect_args={"check_same_thread": False},
    )

    # Ensure SQLite enforces foreign key constraints (required for CASCADE/SET NULL)
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def test_session(test_engine):
    session_maker = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def fake_notifier():
    return FakeNotifier()


@pytest.fixture
def fake_cache():
    return FakeCache()


@pytest.fixture
def fake_images():
    return FakeImages()


@pytest.fixture
def failing_collaborators():
    """Notifier, cache and image storage that fail on every call."""
    return FakeNotifier(fail=True), FakeCache(fail=True), FakeImages(fail=True)


@pytest.fixture
def runner():
    return SideEffectRunner()


@pytest.fixture
def note_service(test_session, fake_cache, fake_notifier, fake_images, runner):
    return NoteService(
        test_session, cache=fake_cache, notifier=fake_notifier, images=fake_images, runner=runner
    )


@pytest.fixture
async def make_user(test_session):
    """Factory creating users through the repository."""
    repo = UserRepository(test_session)
    counter = {"n": 0}

    async def _make(name: str = "Test User", email: str = None):
        counter["n"] += 1
        return await repo.create_user(
            {
                "email": email or f"user{counter['n']}@test.com",
                "name": name,
                "password_hash": hash_password(TEST_PASSWORD),
            }
        )

    return _make


@pytest.fixture
async def test_user(make_user):
    return await make_user("Max")


@pytest.fixture
async def other_user(make_user):
    return await make_user("Manuel")


@pytest.fixture
async def make_note(test_session):
    """Factory inserting notes with increasing creation times."""
    repo = NoteRepository(test_session)
    base = datetime(2025, 1, 1, tzinfo=timezone.utc)
    counter = {"n": 0}

    async def _make(creator_id: UUID, title: str = "First note", content: str = "Some content"):
        counter["n"] += 1
        return await repo.create_note(
            {
                "title": title,
                "content": content,
                "creator_id": creator_id,
                "created_at": base + timedelta(minutes=counter["n"]),
            }
        )

    return _make


def auth_headers_for(user) -> dict:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(test_user):
    """Create authentication headers with a valid JWT token."""
    return auth_headers_for(test_user)


@pytest.fixture
def image_storage(tmp_path):
    return ImageStorage(root=str(tmp_path / "images"))


@pytest.fixture
def test_app(test_session, fake_cache, fake_notifier, image_storage, runner):
    """FastAPI app with database and collaborators overridden."""

    async def _override_get_db():
        yield test_session

    app.dependency_overrides[get_db_session] = _override_get_db
    app.dependency_overrides[get_notes_cache] = lambda: fake_cache
    app.dependency_overrides[get_notifier] = lambda: fake_notifier
    app.dependency_overrides[get_image_storage] = lambda: image_storage
    app.dependency_overrides[get_side_effect_runner] = lambda: runner
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(test_app):
    """Create async test client."""
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as ac:
        yield ac
