"""Pydantic schemas for the Snippet API."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator

from snippetbox.db.models import Snippet, SnippetLanguage
from snippetbox.db.models.snippet import (
    AUTHOR_MAX_LENGTH,
    CONTENT_MAX_LENGTH,
    DEFAULT_AUTHOR,
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)
from snippetbox.db.models.snippet_tag import TAG_MAX_LENGTH
from snippetbox.schemas.common import CamelModel
from snippetbox.utils.tags import normalize_tags

MAX_TAGS_PER_SNIPPET = 20


def _required_text(value: str, label: str, max_length: int) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{label} is required")
    if len(value) > max_length:
        raise ValueError(f"{label} cannot exceed {max_length} characters")
    return value


def _clean_description(value: str) -> str:
    value = value.strip()
    if len(value) > DESCRIPTION_MAX_LENGTH:
        raise ValueError(f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters")
    return value


def _clean_tags(value: list[str]) -> list[str]:
    tags = normalize_tags(value)
    if len(tags) > MAX_TAGS_PER_SNIPPET:
        raise ValueError(f"A snippet can have at most {MAX_TAGS_PER_SNIPPET} tags")
    too_long = [tag for tag in tags if len(tag) > TAG_MAX_LENGTH]
    if too_long:
        raise ValueError(f"Tags cannot exceed {TAG_MAX_LENGTH} characters")
    return tags


def _coerce_language(value: object) -> object:
    if isinstance(value, str):
        value = value.strip().lower()
        return value or None
    return value


# =============================================================================
# Request Schemas
# =============================================================================


class SnippetCreate(CamelModel):
    """Body of a create request."""

    title: str
    content: str
    language: SnippetLanguage | None = None
    tags: list[str] = Field(default_factory=list)
    description: str | None = None
    is_public: bool = False
    author: str | None = Field(None, alias="by")

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        return _required_text(value, "Title", TITLE_MAX_LENGTH)

    @field_validator("content")
    @classmethod
    def validate_content(cls, value: str) -> str:
        return _required_text(value, "Content", CONTENT_MAX_LENGTH)

    @field_validator("language", mode="before")
    @classmethod
    def validate_language(cls, value: object) -> object:
        return _coerce_language(value)

    @field_validator("tags", mode="before")
    @classmethod
    def null_tags(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, value: list[str]) -> list[str]:
        return _clean_tags(value)

    @field_validator("is_public", mode="before")
    @classmethod
    def null_is_public(cls, value: object) -> object:
        return False if value is None else value

    @field_validator("description")
    @classmethod
    def validate_description(cls, value: str | None) -> str | None:
        return None if value is None else _clean_description(value)

    @field_validator("author")
    @classmethod
    def validate_author(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        value = value.strip()
        if len(value) > AUTHOR_MAX_LENGTH:
            raise ValueError(f"Author cannot exceed {AUTHOR_MAX_LENGTH} characters")
        return value

    @property
    def language_or_default(self) -> SnippetLanguage:
        return self.language or SnippetLanguage.TEXT

    @property
    def author_or_default(self) -> str:
        return self.author or DEFAULT_AUTHOR


class SnippetUpdate(CamelModel):
    """Partial update: only fields present in the body are applied.

    An explicit ``null`` is treated the same as an absent field.
    """

    title: str | None = None
    content: str | None = None
    language: SnippetLanguage | None = None
    tags: list[str] | None = None
    description: str | None = None
    is_public: bool | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str | None) -> str | None:
        return None if value is None else _required_text(value, "Title", TITLE_MAX_LENGTH)

    @field_validator("content")
    @classmethod
    def validate_content(cls, value: str | None) -> str | None:
        return None if value is None else _required_text(value, "Content", CONTENT_MAX_LENGTH)

    @field_validator("language", mode="before")
    @classmethod
    def validate_language(cls, value: object) -> object:
        return _coerce_language(value)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, value: list[str] | None) -> list[str] | None:
        return None if value is None else _clean_tags(value)

    @field_validator("description")
    @classmethod
    def validate_description(cls, value: str | None) -> str | None:
        return None if value is None else _clean_description(value)

    def changes(self) -> dict[str, object]:
        """Fields the client actually supplied, keyed by attribute name."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class BulkDeleteRequest(CamelModel):
    """Ids of snippets to delete in one call."""

    ids: list[str] = Field(..., min_length=1, max_length=100)


# =============================================================================
# Response Schemas
# =============================================================================


class SnippetResponse(CamelModel):
    """A snippet as seen by one caller."""

    id: str
    title: str
    content: str
    preview: str
    language: SnippetLanguage
    tags: list[str]
    author: str = Field(alias="by")
    description: str
    is_public: bool
    user_id: str
    user_email: str
    created_at: datetime
    updated_at: datetime
    is_favorited: bool = False

    @classmethod
    def from_snippet(
        cls, snippet: Snippet, *, is_favorited: bool = False, **extra: object
    ) -> SnippetResponse:
        return cls(
            id=snippet.id,
            title=snippet.title,
            content=snippet.content,
            preview=snippet.preview,
            language=snippet.language,
            tags=snippet.tags,
            author=snippet.author,
            description=snippet.description,
            is_public=snippet.is_public,
            user_id=snippet.user_id,
            user_email=snippet.user_email,
            created_at=snippet.created_at,
            updated_at=snippet.updated_at,
            is_favorited=is_favorited,
            **extra,
        )


class SnippetDetail(SnippetResponse):
    """Single snippet response, with how many users favorited it."""

    favorite_count: int = 0


class TagCount(CamelModel):
    """A tag and how many of the caller's snippets carry it."""

    name: str
    count: int


class FavoriteToggleResult(CamelModel):
    """Outcome of a toggle."""

    favorited: bool


class FavoriteStatus(CamelModel):
    """Whether the caller has favorited a snippet."""

    is_favorited: bool


class BulkDeleteResult(CamelModel):
    """How many snippets a bulk delete removed."""

    deleted: int
