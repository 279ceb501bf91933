"""Snippet model: an owned, optionally public piece of text."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, Enum, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from snippetbox.db.base import Base
from snippetbox.db.models.enums import SnippetLanguage

if TYPE_CHECKING:
    from snippetbox.db.models.snippet_tag import SnippetTag

TITLE_MAX_LENGTH = 100
CONTENT_MAX_LENGTH = 10000
DESCRIPTION_MAX_LENGTH = 200
AUTHOR_MAX_LENGTH = 100
PREVIEW_LENGTH = 150
DEFAULT_AUTHOR = "Unknown"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Snippet(Base):
    """A stored snippet with metadata.

    Favorites reference snippets by id only; a snippet does not know who
    favorited it. Ownership (``user_id``) is fixed at creation.
    """

    __tablename__ = "snippets"

    # Primary key
    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )

    # Content
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    language: Mapped[SnippetLanguage] = mapped_column(
        Enum(SnippetLanguage), default=SnippetLanguage.TEXT, nullable=False
    )
    author: Mapped[str] = mapped_column(
        String(AUTHOR_MAX_LENGTH), default=DEFAULT_AUTHOR, nullable=False
    )
    description: Mapped[str] = mapped_column(
        String(DESCRIPTION_MAX_LENGTH), default="", nullable=False
    )
    is_public: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Owner
    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    user_email: Mapped[str] = mapped_column(String(255), nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    # Relationships
    tag_links: Mapped[list[SnippetTag]] = relationship(
        "SnippetTag",
        back_populates="snippet",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="SnippetTag.name",
    )

    # Indexes
    __table_args__ = (
        Index("ix_snippets_user_id_created_at", "user_id", "created_at"),
        Index("ix_snippets_user_id_language", "user_id", "language"),
        Index("ix_snippets_is_public", "is_public"),
    )

    @property
    def tags(self) -> list[str]:
        """Tag names, alphabetical."""
        return sorted(link.name for link in self.tag_links)

    @property
    def preview(self) -> str:
        """Leading slice of the content for list views."""
        if len(self.content) > PREVIEW_LENGTH:
            return self.content[:PREVIEW_LENGTH] + "..."
        return self.content

    def set_tags(self, names: Iterable[str]) -> None:
        """Replace the tag set, keeping links that survive unchanged."""
        from snippetbox.db.models.snippet_tag import SnippetTag

        wanted = set(names)
        kept = [link for link in self.tag_links if link.name in wanted]
        present = {link.name for link in kept}
        kept.extend(SnippetTag(name=name) for name in sorted(wanted - present))
        self.tag_links = kept

    def __repr__(self) -> str:
        return f"<Snippet(id={self.id}, user_id={self.user_id}, title={self.title!r})>"
