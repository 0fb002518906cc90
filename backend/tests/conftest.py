"""Pytest fixtures for testing."""
import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Any

# Settings are validated when api/db modules are imported; point them at SQLite first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
# Ensure tests exercise the bearer token check regardless of local .env
os.environ["DEV_MODE"] = "false"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from core.config import Settings  # noqa: E402
from models.base import Base  # noqa: E402
from models.bookmark import Bookmark  # noqa: E402
from services.bookmark_store import BookmarkStore  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite://"
TEST_API_TOKEN = "test-api-token"


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """
    Create a fresh in-memory database for each test.

    StaticPool keeps the single connection alive so every session sees the
    same in-memory database.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create an async session on the test database."""
    session_factory = async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
def store(db_session: AsyncSession) -> BookmarkStore:
    """Bookmark store bound to the test session."""
    return BookmarkStore(db_session)


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a known API token and dev mode off."""
    return Settings(
        _env_file=None,  # Don't load from .env file
        database_url=TEST_DATABASE_URL,
        api_token=TEST_API_TOKEN,
        dev_mode=False,
    )


@pytest.fixture
async def client(
    db_session: AsyncSession,
    test_settings: Settings,
) -> AsyncGenerator[AsyncClient]:
    """Create an authenticated test client with database session override."""
    # Clear the settings cache so it picks up DATABASE_URL from environment
    from core.config import get_settings

    get_settings.cache_clear()

    from api.main import app
    from db.session import get_async_session

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    def override_get_settings() -> Settings:
        return test_settings

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_settings] = override_get_settings

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Authorization": f"Bearer {TEST_API_TOKEN}"},
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def make_bookmark(
    db_session: AsyncSession,
) -> Callable[..., Awaitable[Bookmark]]:
    """Return a helper that inserts a bookmark row directly, bypassing validation."""

    async def _make(**overrides: Any) -> Bookmark:
        fields: dict[str, Any] = {
            "title": "Thinkful",
            "url": "https://www.thinkful.com",
            "description": "Think outside the classroom",
            "rating": 5,
        }
        fields.update(overrides)
        bookmark = Bookmark(**fields)
        db_session.add(bookmark)
        await db_session.flush()
        await db_session.refresh(bookmark)
        return bookmark

    return _make
