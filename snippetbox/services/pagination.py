"""Page descriptors shared by the listing and favorites services."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from snippetbox.core.config import settings
from snippetbox.db.models import Snippet
from snippetbox.utils.tags import parse_positive_int

# Largest OFFSET SQLite accepts as a bound integer
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class PageRequest:
    """A 1-indexed page position with a bounded page size."""

    page: int = 1
    limit: int = 10

    @classmethod
    def parse(cls, page: object = None, limit: object = None) -> PageRequest:
        """Build from raw query values; bad or non-positive input clamps to 1.

        The page is also capped so the row offset stays bindable.
        """
        page_size = parse_positive_int(
            limit,
            default=settings.default_page_size,
            maximum=settings.max_page_size,
        )
        return cls(
            page=parse_positive_int(page, default=1, maximum=MAX_OFFSET // page_size),
            limit=page_size,
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class SnippetPage:
    """One page of snippets plus which of them the caller has favorited."""

    items: list[Snippet]
    total: int
    request: PageRequest
    favorited_ids: set[str] = field(default_factory=set)

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.request.limit)

    def is_favorited(self, snippet: Snippet) -> bool:
        return snippet.id in self.favorited_ids
