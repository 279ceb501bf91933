"""SnippetTag model: one lowercase tag attached to a snippet."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from snippetbox.db.base import Base

if TYPE_CHECKING:
    from snippetbox.db.models.snippet import Snippet

TAG_MAX_LENGTH = 50


class SnippetTag(Base):
    """Association between a snippet and a tag name."""

    __tablename__ = "snippet_tags"

    # Composite primary key collapses duplicate tags per snippet
    snippet_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("snippets.id", ondelete="CASCADE"), primary_key=True
    )
    name: Mapped[str] = mapped_column(String(TAG_MAX_LENGTH), primary_key=True)

    # Relationships
    snippet: Mapped[Snippet] = relationship("Snippet", back_populates="tag_links")

    # Indexes
    __table_args__ = (
        Index("ix_snippet_tags_name", "name"),
    )
