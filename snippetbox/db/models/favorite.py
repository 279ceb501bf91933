"""Favorite model: a per-user bookmark of a snippet."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from snippetbox.db.base import Base


class Favorite(Base):
    """A user's favorite mark on a snippet.

    ``snippet_id`` is a plain back-reference with no foreign key: deletes
    cascade through ``snippetbox.services.cascade`` and a favorite whose
    snippet no longer exists is ignored by every reader.
    """

    __tablename__ = "favorites"

    # Primary key
    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )

    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    snippet_id: Mapped[str] = mapped_column(String(36), nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    # Indexes
    __table_args__ = (
        UniqueConstraint("user_id", "snippet_id", name="uq_favorites_user_snippet"),
        Index("ix_favorites_user_id_created_at", "user_id", "created_at"),
        Index("ix_favorites_snippet_id", "snippet_id"),
    )

    def __repr__(self) -> str:
        return f"<Favorite(user_id={self.user_id}, snippet_id={self.snippet_id})>"
