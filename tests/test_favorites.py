"""Tests for the favorite service."""

import asyncio
from datetime import datetime, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from snippetbox.core.exceptions import (
    FavoriteConflictError,
    SnippetAccessDeniedError,
    SnippetNotFoundError,
)
from snippetbox.db.base import Base
from snippetbox.db.models import Favorite, Snippet
from snippetbox.db.session import configure_sqlite_engine
from snippetbox.services.favorite import FavoriteService
from snippetbox.services.pagination import PageRequest


def at(minute: int) -> datetime:
    return datetime(2026, 1, 1, 12, minute, tzinfo=timezone.utc)


async def _add_snippet(db_session, user_id="alice", is_public=False, title="Snippet") -> Snippet:
    snippet = Snippet(
        title=title,
        content="content",
        user_id=user_id,
        user_email=f"{user_id}@example.com",
        is_public=is_public,
    )
    db_session.add(snippet)
    await db_session.commit()
    return snippet


async def _favorite_count(db_session, snippet_id: str) -> int:
    result = await db_session.execute(
        select(func.count(Favorite.id)).where(Favorite.snippet_id == snippet_id)
    )
    return result.scalar()


class TestToggle:
    """Tests for FavoriteService.toggle."""

    @pytest.mark.asyncio
    async def test_toggle_twice_restores_state(self, db_session):
        """Test that toggling adds then removes the favorite."""
        snippet = await _add_snippet(db_session, is_public=True)
        service = FavoriteService(db_session)

        assert await service.toggle(snippet.id, "bob") is True
        assert await service.is_favorited(snippet.id, "bob") is True

        assert await service.toggle(snippet.id, "bob") is False
        assert await service.is_favorited(snippet.id, "bob") is False
        assert await _favorite_count(db_session, snippet.id) == 0

    @pytest.mark.asyncio
    async def test_owner_can_favorite_private_snippet(self, db_session):
        snippet = await _add_snippet(db_session)
        service = FavoriteService(db_session)

        assert await service.toggle(snippet.id, "alice") is True

    @pytest.mark.asyncio
    async def test_private_snippet_of_other_user_is_forbidden(self, db_session):
        snippet = await _add_snippet(db_session)
        service = FavoriteService(db_session)

        with pytest.raises(SnippetAccessDeniedError):
            await service.toggle(snippet.id, "bob")
        assert await _favorite_count(db_session, snippet.id) == 0

    @pytest.mark.asyncio
    async def test_missing_snippet_is_not_found(self, db_session):
        service = FavoriteService(db_session)

        with pytest.raises(SnippetNotFoundError):
            await service.toggle("does-not-exist", "bob")


class TestConcurrentToggle:
    """Tests for toggles racing on a file-backed database."""

    @pytest.fixture
    async def file_session_maker(self, tmp_path):
        """Session factory over a real SQLite file, one connection per session."""
        engine = create_async_engine(
            f"sqlite+aiosqlite:///{tmp_path / 'favorites.db'}",
            connect_args={"timeout": 30},
        )
        configure_sqlite_engine(engine)
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        await engine.dispose()

    async def _public_snippet(self, session_maker) -> str:
        async with session_maker() as session:
            snippet = await _add_snippet(session, is_public=True)
            return snippet.id

    @pytest.mark.asyncio
    async def test_overlapping_toggles_serialize(self, file_session_maker):
        """Test that a toggle started while another is open sees its result."""
        snippet_id = await self._public_snippet(file_session_maker)
        first_toggled = asyncio.Event()

        async def first():
            async with file_session_maker() as session:
                result = await FavoriteService(session).toggle(snippet_id, "bob")
                first_toggled.set()
                await asyncio.sleep(0.2)
                await session.commit()
                return result

        async def second():
            await first_toggled.wait()
            async with file_session_maker() as session:
                result = await FavoriteService(session).toggle(snippet_id, "bob")
                await session.commit()
                return result

        results = await asyncio.gather(first(), second(), return_exceptions=True)

        assert results == [True, False]
        async with file_session_maker() as session:
            assert await _favorite_count(session, snippet_id) == 0

    @pytest.mark.asyncio
    async def test_simultaneous_toggles_never_fail(self, file_session_maker):
        snippet_id = await self._public_snippet(file_session_maker)

        async def toggle():
            async with file_session_maker() as session:
                result = await FavoriteService(session).toggle(snippet_id, "bob")
                await session.commit()
                return result

        results = await asyncio.gather(toggle(), toggle(), return_exceptions=True)

        assert sorted(results) == [False, True]
        async with file_session_maker() as session:
            assert await _favorite_count(session, snippet_id) == 0


class TestAdd:
    """Tests for FavoriteService.add."""

    @pytest.mark.asyncio
    async def test_duplicate_add_raises_conflict(self, db_session):
        snippet = await _add_snippet(db_session, is_public=True)
        service = FavoriteService(db_session)

        await service.add(snippet.id, "bob")
        with pytest.raises(FavoriteConflictError) as exc_info:
            await service.add(snippet.id, "bob")

        assert exc_info.value.status_code == 409
        assert await _favorite_count(db_session, snippet.id) == 1


class TestReads:
    """Tests for favorite checks, counts and listing."""

    @pytest.mark.asyncio
    async def test_orphaned_favorite_reads_false(self, db_session):
        """Test that a favorite pointing at a missing snippet is not reported."""
        db_session.add(Favorite(user_id="bob", snippet_id="gone"))
        await db_session.commit()
        service = FavoriteService(db_session)

        assert await service.is_favorited("gone", "bob") is False

    @pytest.mark.asyncio
    async def test_count_for_snippet(self, db_session):
        snippet = await _add_snippet(db_session, is_public=True)
        db_session.add(Favorite(user_id="bob", snippet_id=snippet.id))
        db_session.add(Favorite(user_id="carol", snippet_id=snippet.id))
        await db_session.commit()
        service = FavoriteService(db_session)

        assert await service.count_for_snippet(snippet.id) == 2

    @pytest.mark.asyncio
    async def test_favorited_among(self, db_session):
        first = await _add_snippet(db_session, is_public=True)
        second = await _add_snippet(db_session, is_public=True)
        db_session.add(Favorite(user_id="bob", snippet_id=first.id))
        await db_session.commit()
        service = FavoriteService(db_session)

        assert await service.favorited_among("bob", [first.id, second.id]) == {first.id}
        assert await service.favorited_among("bob", []) == set()

    @pytest.mark.asyncio
    async def test_list_favorites_newest_first(self, db_session):
        older = await _add_snippet(db_session, is_public=True, title="older")
        newer = await _add_snippet(db_session, is_public=True, title="newer")
        db_session.add(Favorite(user_id="bob", snippet_id=older.id, created_at=at(1)))
        db_session.add(Favorite(user_id="bob", snippet_id=newer.id, created_at=at(2)))
        await db_session.commit()
        service = FavoriteService(db_session)

        page = await service.list_favorites("bob", PageRequest())

        assert [s.title for s in page.items] == ["newer", "older"]
        assert page.total == 2
        assert all(page.is_favorited(s) for s in page.items)

    @pytest.mark.asyncio
    async def test_list_favorites_skips_orphans_and_private(self, db_session):
        """Test that deleted or no-longer-public snippets drop out of the list."""
        visible = await _add_snippet(db_session, is_public=True, title="visible")
        hidden = await _add_snippet(db_session, is_public=True, title="hidden")
        db_session.add(Favorite(user_id="bob", snippet_id=visible.id))
        db_session.add(Favorite(user_id="bob", snippet_id=hidden.id))
        db_session.add(Favorite(user_id="bob", snippet_id="gone"))
        await db_session.commit()

        hidden.is_public = False
        await db_session.commit()
        service = FavoriteService(db_session)

        page = await service.list_favorites("bob", PageRequest())

        assert [s.title for s in page.items] == ["visible"]
        assert page.total == 1

    @pytest.mark.asyncio
    async def test_list_favorites_paginates(self, db_session):
        for minute in range(3):
            snippet = await _add_snippet(db_session, is_public=True, title=f"s{minute}")
            db_session.add(Favorite(user_id="bob", snippet_id=snippet.id, created_at=at(minute)))
        await db_session.commit()
        service = FavoriteService(db_session)

        page = await service.list_favorites("bob", PageRequest(page=2, limit=2))

        assert [s.title for s in page.items] == ["s0"]
        assert page.total == 3
        assert page.pages == 2
