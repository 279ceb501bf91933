"""Snippet service: create, read, update, delete, and tag aggregation."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox.core.logging import get_logger
from snippetbox.core.security import Identity
from snippetbox.db.models import Snippet, SnippetTag
from snippetbox.db.models.snippet import utcnow
from snippetbox.schemas.snippet import SnippetCreate, SnippetUpdate
from snippetbox.services.cascade import CascadeDeleter
from snippetbox.services.favorite import FavoriteService
from snippetbox.services.policy import ensure_readable, ensure_writable

logger = get_logger(__name__)


@dataclass
class SnippetView:
    """A single snippet with the caller's favorite status."""

    snippet: Snippet
    is_favorited: bool
    favorite_count: int


class SnippetService:
    """Service for owner-scoped snippet operations.

    Existence is always checked before ownership or visibility, and both
    before anything is written.
    """

    def __init__(self, db: AsyncSession):
        """Initialize the snippet service.

        Args:
            db: The database session.
        """
        self.db = db
        self.favorites = FavoriteService(db)
        self.cascade = CascadeDeleter(db)

    async def create(self, data: SnippetCreate, owner: Identity) -> Snippet:
        """Create a snippet owned by ``owner``."""
        snippet = Snippet(
            title=data.title,
            content=data.content,
            language=data.language_or_default,
            author=data.author_or_default,
            description=data.description or "",
            is_public=data.is_public,
            user_id=owner.uid,
            user_email=owner.email,
        )
        snippet.set_tags(data.tags)
        self.db.add(snippet)
        await self.db.flush()

        logger.info(
            "snippet_created",
            snippet_id=snippet.id,
            user_id=owner.uid,
            language=snippet.language.value,
            tags=snippet.tags,
            is_public=snippet.is_public,
        )
        return snippet

    async def get_for_user(self, snippet_id: str, user_id: str) -> SnippetView:
        """Load a snippet the user may read, with favorite info.

        Raises:
            SnippetNotFoundError: If the snippet does not exist.
            SnippetAccessDeniedError: If it is private to another user.
        """
        snippet = await self.db.get(Snippet, snippet_id)
        snippet = ensure_readable(snippet, snippet_id, user_id)

        return SnippetView(
            snippet=snippet,
            is_favorited=await self.favorites.is_favorited(snippet_id, user_id),
            favorite_count=await self.favorites.count_for_snippet(snippet_id),
        )

    async def update(self, snippet_id: str, data: SnippetUpdate, user_id: str) -> SnippetView:
        """Apply a partial update to a snippet the user owns.

        Raises:
            SnippetNotFoundError: If the snippet does not exist.
            SnippetAccessDeniedError: If the user is not the owner.
        """
        snippet = await self.db.get(Snippet, snippet_id)
        snippet = ensure_writable(snippet, snippet_id, user_id, action="update")

        changes = data.changes()
        changed_fields = sorted(changes)
        tags = changes.pop("tags", None)
        for name, value in changes.items():
            setattr(snippet, name, value)
        if tags is not None:
            snippet.set_tags(tags)
        if changes or tags is not None:
            snippet.updated_at = utcnow()

        await self.db.flush()

        logger.info(
            "snippet_updated",
            snippet_id=snippet_id,
            user_id=user_id,
            fields=changed_fields,
        )

        return SnippetView(
            snippet=snippet,
            is_favorited=await self.favorites.is_favorited(snippet_id, user_id),
            favorite_count=await self.favorites.count_for_snippet(snippet_id),
        )

    async def delete(self, snippet_id: str, user_id: str) -> None:
        """Delete a snippet the user owns, along with every favorite of it.

        Raises:
            SnippetNotFoundError: If the snippet does not exist.
            SnippetAccessDeniedError: If the user is not the owner.
        """
        snippet = await self.db.get(Snippet, snippet_id)
        snippet = ensure_writable(snippet, snippet_id, user_id, action="delete")
        await self.cascade.delete_snippet(snippet)

    async def delete_many(self, snippet_ids: list[str], user_id: str) -> list[str]:
        """Delete those of ``snippet_ids`` the user owns; others are skipped.

        Returns:
            The ids actually deleted.
        """
        return await self.cascade.delete_where(
            Snippet.user_id == user_id,
            Snippet.id.in_(snippet_ids),
        )

    async def tags_with_counts(self, user_id: str) -> list[tuple[str, int]]:
        """Count the user's own snippets per tag.

        Ordered by count descending, then tag name ascending.
        """
        count = func.count(SnippetTag.snippet_id).label("count")
        result = await self.db.execute(
            select(SnippetTag.name, count)
            .join(Snippet, Snippet.id == SnippetTag.snippet_id)
            .where(Snippet.user_id == user_id)
            .group_by(SnippetTag.name)
            .order_by(count.desc(), SnippetTag.name.asc())
        )
        return [(name, tag_count) for name, tag_count in result.all()]
