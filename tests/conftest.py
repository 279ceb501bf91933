"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Awaitable, Callable
from datetime import datetime
from pathlib import Path

# Set config BEFORE importing app modules
_test_tmp_dir = tempfile.mkdtemp(prefix="snippetbox_test_")
os.environ["SNIPPETBOX_CONFIG_PATH"] = _test_tmp_dir
os.environ["SNIPPETBOX_JWT_SECRET_KEY"] = "test-secret-key-with-at-least-32-bytes"
os.environ["SNIPPETBOX_CREATE_TABLES_ON_STARTUP"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from snippetbox.core.security import create_access_token
from snippetbox.db import get_db
from snippetbox.db.base import Base
from snippetbox.db.models import Favorite, Snippet, SnippetLanguage
from snippetbox.db.session import configure_sqlite_engine
from snippetbox.main import app


@pytest.fixture
async def db_engine():
    """Create an in-memory test database engine."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool
    )
    configure_sqlite_engine(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(db_engine):
    """Session factory bound to the test engine."""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_maker):
    """Create a test database session."""
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker):
    """Create a test client with overridden database dependency."""

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> Callable[..., dict[str, str]]:
    """Build an Authorization header for a user id."""

    def _headers(uid: str, email: str | None = None) -> dict[str, str]:
        token = create_access_token(uid, email or f"{uid}@example.com")
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def make_snippet(session_maker) -> Callable[..., Awaitable[Snippet]]:
    """Insert and commit a snippet in its own session."""

    async def _make(
        user_id: str = "alice",
        title: str = "Snippet",
        content: str = "print('hello')",
        language: SnippetLanguage = SnippetLanguage.TEXT,
        tags: list[str] | None = None,
        is_public: bool = False,
        created_at: datetime | None = None,
    ) -> Snippet:
        async with session_maker() as session:
            snippet = Snippet(
                title=title,
                content=content,
                language=language,
                is_public=is_public,
                user_id=user_id,
                user_email=f"{user_id}@example.com",
            )
            if created_at is not None:
                snippet.created_at = created_at
            snippet.set_tags(tags or [])
            session.add(snippet)
            await session.commit()
            return snippet

    return _make


@pytest.fixture
def make_favorite(session_maker) -> Callable[..., Awaitable[Favorite]]:
    """Insert and commit a favorite row directly, bypassing access checks."""

    async def _make(user_id: str, snippet_id: str, created_at: datetime | None = None) -> Favorite:
        async with session_maker() as session:
            favorite = Favorite(user_id=user_id, snippet_id=snippet_id)
            if created_at is not None:
                favorite.created_at = created_at
            session.add(favorite)
            await session.commit()
            return favorite

    return _make


def pytest_sessionfinish(session, exitstatus):
    """Clean up temp directories after test session."""
    import shutil
    if Path(_test_tmp_dir).exists():
        shutil.rmtree(_test_tmp_dir, ignore_errors=True)
