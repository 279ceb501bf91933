"""Listing service: filtered, sorted, paginated snippet lists.

Every list is scoped by the visibility rule (own snippets plus public ones)
and each result carries the caller's favorite status.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from sqlalchemy import ColumnElement, exists, false, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox.core.logging import get_logger
from snippetbox.db.models import Favorite, Snippet, SnippetLanguage, SnippetTag
from snippetbox.services.favorite import FavoriteService
from snippetbox.services.pagination import PageRequest, SnippetPage
from snippetbox.services.policy import visible_to
from snippetbox.utils.tags import parse_tag_list

logger = get_logger(__name__)

ALL_LANGUAGES = "all"


class SortOrder(str, Enum):
    """Sort order options."""

    ASC = "ASC"
    DESC = "DESC"


class SortField(str, Enum):
    """Sort field options for snippets."""

    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    TITLE = "title"
    LANGUAGE = "language"


# Accepted spellings of each sort field in the ``sort`` query parameter
SORT_ALIASES = {
    "createdat": SortField.CREATED_AT,
    "created_at": SortField.CREATED_AT,
    "updatedat": SortField.UPDATED_AT,
    "updated_at": SortField.UPDATED_AT,
    "title": SortField.TITLE,
    "language": SortField.LANGUAGE,
}


@dataclass(frozen=True)
class SortSpec:
    """A sort field and direction."""

    field: SortField = SortField.CREATED_AT
    order: SortOrder = SortOrder.DESC

    @classmethod
    def parse(cls, raw: str | None) -> SortSpec:
        """Parse ``[-|+]field``; a leading ``-`` sorts descending.

        Unknown fields fall back to newest first.
        """
        if not raw or not raw.strip():
            return cls()

        raw = raw.strip()
        order = SortOrder.ASC
        if raw[0] in "-+":
            order = SortOrder.DESC if raw[0] == "-" else SortOrder.ASC
            raw = raw[1:]

        sort_field = SORT_ALIASES.get(raw.lower())
        if sort_field is None:
            logger.warning("unknown_sort_field", sort=raw)
            return cls()
        return cls(field=sort_field, order=order)


@dataclass
class SnippetFilters:
    """Optional narrowing of a snippet list."""

    search: str | None = None
    tags: list[str] = field(default_factory=list)
    language: str | None = None
    favorite_only: bool = False

    @classmethod
    def from_query(
        cls,
        search: str | None = None,
        tags: str | None = None,
        language: str | None = None,
        favorite: str | bool | None = None,
    ) -> SnippetFilters:
        """Build filters from raw query-string values."""
        if isinstance(favorite, str):
            favorite_only = favorite.strip().lower() in ("true", "1", "yes")
        else:
            favorite_only = bool(favorite)
        return cls(
            search=search.strip() if search and search.strip() else None,
            tags=parse_tag_list(tags),
            language=language.strip().lower() if language and language.strip() else None,
            favorite_only=favorite_only,
        )


class ListingService:
    """Builds visibility-scoped snippet lists annotated with favorite status."""

    def __init__(self, db: AsyncSession):
        """Initialize the listing service.

        Args:
            db: The database session.
        """
        self.db = db
        self.favorites = FavoriteService(db)

    def build_criteria(self, user_id: str, filters: SnippetFilters) -> list[ColumnElement[bool]]:
        """Translate filters into WHERE clauses, visibility always first."""
        criteria: list[ColumnElement[bool]] = [visible_to(user_id)]

        if filters.search:
            tag_match = exists().where(
                SnippetTag.snippet_id == Snippet.id,
                SnippetTag.name.icontains(filters.search, autoescape=True),
            )
            criteria.append(
                or_(
                    Snippet.title.icontains(filters.search, autoescape=True),
                    Snippet.content.icontains(filters.search, autoescape=True),
                    tag_match,
                )
            )

        if filters.tags:
            criteria.append(
                exists().where(
                    SnippetTag.snippet_id == Snippet.id,
                    SnippetTag.name.in_(filters.tags),
                )
            )

        if filters.language and filters.language != ALL_LANGUAGES:
            try:
                criteria.append(Snippet.language == SnippetLanguage(filters.language))
            except ValueError:
                # Exact match against a language no snippet can have
                criteria.append(false())

        if filters.favorite_only:
            criteria.append(
                Snippet.id.in_(
                    select(Favorite.snippet_id).where(Favorite.user_id == user_id)
                )
            )

        return criteria

    async def list_snippets(
        self,
        user_id: str,
        filters: SnippetFilters,
        page: PageRequest,
        sort: SortSpec | None = None,
    ) -> SnippetPage:
        """List snippets the user can read.

        Args:
            user_id: The requesting user.
            filters: Search, tag, language and favorite filters.
            page: Page position and size.
            sort: Sort field and direction; newest first when omitted.

        Returns:
            The page of snippets, the total match count and favorite flags.
        """
        sort = sort or SortSpec()
        criteria = self.build_criteria(user_id, filters)
        query = select(Snippet).where(*criteria)

        # Get total count (before pagination)
        count_query = select(func.count()).select_from(query.subquery())
        total_result = await self.db.execute(count_query)
        total = total_result.scalar() or 0

        sort_column = getattr(Snippet, sort.field.value)
        if sort.order == SortOrder.ASC:
            query = query.order_by(sort_column.asc(), Snippet.id.asc())
        else:
            query = query.order_by(sort_column.desc(), Snippet.id.desc())

        query = query.offset(page.offset).limit(page.limit)
        result = await self.db.execute(query)
        snippets = list(result.scalars().all())

        favorited_ids = await self.favorites.favorited_among(
            user_id, [s.id for s in snippets]
        )

        logger.debug(
            "snippets_listed",
            user_id=user_id,
            total=total,
            page=page.page,
            returned=len(snippets),
        )

        return SnippetPage(
            items=snippets,
            total=total,
            request=page,
            favorited_ids=favorited_ids,
        )
