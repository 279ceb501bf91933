"""Favorite service: toggling, checking, and listing a user's favorites."""

from __future__ import annotations

from collections.abc import Collection

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox.core.exceptions import FavoriteConflictError
from snippetbox.core.logging import get_logger
from snippetbox.db.models import Favorite, Snippet
from snippetbox.services.pagination import PageRequest, SnippetPage
from snippetbox.services.policy import ensure_readable, visible_to

logger = get_logger(__name__)


class FavoriteService:
    """Service for per-user favorite marks.

    Uniqueness of ``(user_id, snippet_id)`` is enforced by the database; the
    service reads before it writes and treats a lost insert race as the
    snippet already being favorited.

    A favorite whose snippet no longer exists is never reported: every read
    joins back to ``snippets``.
    """

    def __init__(self, db: AsyncSession):
        """Initialize the favorite service.

        Args:
            db: The database session.
        """
        self.db = db

    async def toggle(self, snippet_id: str, user_id: str) -> bool:
        """Flip the user's favorite on a snippet they can read.

        Args:
            snippet_id: The snippet to (un)favorite.
            user_id: The acting user.

        Returns:
            True if the snippet is now favorited, False if the mark was removed.

        Raises:
            SnippetNotFoundError: If the snippet does not exist.
            SnippetAccessDeniedError: If the snippet is private to another user.
        """
        snippet = await self.db.get(Snippet, snippet_id)
        ensure_readable(snippet, snippet_id, user_id, action="favorite")

        result = await self.db.execute(
            select(Favorite.id).where(
                Favorite.user_id == user_id,
                Favorite.snippet_id == snippet_id,
            )
        )
        favorite_id = result.scalar_one_or_none()

        if favorite_id is not None:
            await self.db.execute(delete(Favorite).where(Favorite.id == favorite_id))
            favorited = False
        else:
            try:
                await self.add(snippet_id, user_id)
            except FavoriteConflictError:
                logger.info(
                    "favorite_insert_race_absorbed",
                    snippet_id=snippet_id,
                    user_id=user_id,
                )
            favorited = True

        logger.info(
            "favorite_toggled",
            snippet_id=snippet_id,
            user_id=user_id,
            favorited=favorited,
        )
        return favorited

    async def add(self, snippet_id: str, user_id: str) -> Favorite:
        """Insert a favorite row inside a savepoint.

        No access check happens here; ``toggle`` is the only public entry point
        that reaches it.

        Raises:
            FavoriteConflictError: If the pair already exists.
        """
        favorite = Favorite(user_id=user_id, snippet_id=snippet_id)
        try:
            async with self.db.begin_nested():
                self.db.add(favorite)
        except IntegrityError:
            raise FavoriteConflictError(user_id, snippet_id)
        return favorite

    async def is_favorited(self, snippet_id: str, user_id: str) -> bool:
        """Check the user's favorite mark; missing snippets read as False."""
        result = await self.db.execute(
            select(Favorite.id)
            .join(Snippet, Snippet.id == Favorite.snippet_id)
            .where(
                Favorite.user_id == user_id,
                Favorite.snippet_id == snippet_id,
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def favorited_among(self, user_id: str, snippet_ids: Collection[str]) -> set[str]:
        """Return which of ``snippet_ids`` the user has favorited, in one query."""
        if not snippet_ids:
            return set()
        result = await self.db.execute(
            select(Favorite.snippet_id).where(
                Favorite.user_id == user_id,
                Favorite.snippet_id.in_(list(snippet_ids)),
            )
        )
        return set(result.scalars().all())

    async def count_for_snippet(self, snippet_id: str) -> int:
        """Number of users who favorited a snippet."""
        result = await self.db.execute(
            select(func.count(Favorite.id)).where(Favorite.snippet_id == snippet_id)
        )
        return result.scalar() or 0

    async def list_favorites(self, user_id: str, page: PageRequest) -> SnippetPage:
        """List the user's favorited snippets, most recently favorited first.

        Runs in two steps: page through favorite ids that still point at a
        snippet the user can read, then batch-load those snippets. Snippets
        that vanish between the two steps are dropped from the page.
        """
        favorites = (
            select(Favorite.snippet_id)
            .join(Snippet, Snippet.id == Favorite.snippet_id)
            .where(Favorite.user_id == user_id, visible_to(user_id))
        )

        count_result = await self.db.execute(
            select(func.count()).select_from(favorites.subquery())
        )
        total = count_result.scalar() or 0

        id_result = await self.db.execute(
            favorites.order_by(Favorite.created_at.desc(), Favorite.id.desc())
            .offset(page.offset)
            .limit(page.limit)
        )
        snippet_ids = list(id_result.scalars().all())

        snippets_by_id: dict[str, Snippet] = {}
        if snippet_ids:
            snippet_result = await self.db.execute(
                select(Snippet).where(Snippet.id.in_(snippet_ids))
            )
            snippets_by_id = {s.id: s for s in snippet_result.scalars().all()}

        items = [snippets_by_id[sid] for sid in snippet_ids if sid in snippets_by_id]

        return SnippetPage(
            items=items,
            total=total,
            request=page,
            favorited_ids={s.id for s in items},
        )
