"""Snippet deletion with explicit removal of dependent favorites."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import ColumnElement, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox.core.logging import get_logger
from snippetbox.db.models import Favorite, Snippet, SnippetTag

logger = get_logger(__name__)


class CascadeDeleter:
    """Deletes snippets together with the favorites and tags that point at them.

    Callers are expected to have checked ownership already. All statements run
    in the caller's transaction, so the request either removes a snippet and
    its favorites together or neither.
    """

    def __init__(self, db: AsyncSession):
        """Initialize the deleter.

        Args:
            db: The database session.
        """
        self.db = db

    async def delete_snippet(self, snippet: Snippet) -> None:
        """Delete one already-loaded snippet and its favorites."""
        snippet_id = snippet.id
        await self.db.delete(snippet)
        await self.db.flush()

        removed = await self._delete_favorites([snippet_id])

        logger.info(
            "snippet_deleted",
            snippet_id=snippet_id,
            favorites_removed=removed,
        )

    async def delete_where(self, *criteria: ColumnElement[bool]) -> list[str]:
        """Delete every snippet matching ``criteria``.

        The matching ids are captured before anything is deleted, since the
        same filter evaluated afterwards would match nothing.

        Returns:
            The ids of the deleted snippets.
        """
        result = await self.db.execute(select(Snippet.id).where(*criteria))
        snippet_ids = list(result.scalars().all())
        if not snippet_ids:
            return []

        removed = await self._delete_favorites(snippet_ids)
        await self.db.execute(
            delete(SnippetTag).where(SnippetTag.snippet_id.in_(snippet_ids))
        )
        await self.db.execute(
            delete(Snippet)
            .where(Snippet.id.in_(snippet_ids))
            .execution_options(synchronize_session="fetch")
        )

        logger.info(
            "snippets_deleted",
            count=len(snippet_ids),
            favorites_removed=removed,
        )
        return snippet_ids

    async def _delete_favorites(self, snippet_ids: Sequence[str]) -> int:
        result = await self.db.execute(
            delete(Favorite).where(Favorite.snippet_id.in_(snippet_ids))
        )
        return result.rowcount or 0
