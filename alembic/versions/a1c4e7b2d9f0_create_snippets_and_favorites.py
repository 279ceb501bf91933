"""Create snippets, snippet_tags and favorites tables.

Revision ID: a1c4e7b2d9f0
Revises:
Create Date: 2026-10-19 10:00:00.000000
"""
from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "a1c4e7b2d9f0"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

LANGUAGES = (
    "JAVASCRIPT", "PYTHON", "JAVA", "CPP", "HTML", "CSS", "TEXT",
    "MARKDOWN", "JSON", "SQL", "BASH", "GO", "RUST",
)


def upgrade() -> None:
    """Create the snippet store.

    favorites.snippet_id has no foreign key; deletes cascade in application
    code and readers skip favorites whose snippet is gone.
    """
    op.create_table(
        "snippets",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "language",
            sa.Enum(*LANGUAGES, name="snippetlanguage"),
            nullable=False,
        ),
        sa.Column("author", sa.String(100), nullable=False),
        sa.Column("description", sa.String(200), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        sa.Column("user_id", sa.String(128), nullable=False),
        sa.Column("user_email", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_snippets_user_id_created_at", "snippets", ["user_id", "created_at"])
    op.create_index("ix_snippets_user_id_language", "snippets", ["user_id", "language"])
    op.create_index("ix_snippets_is_public", "snippets", ["is_public"])

    op.create_table(
        "snippet_tags",
        sa.Column(
            "snippet_id",
            sa.String(36),
            sa.ForeignKey("snippets.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("name", sa.String(50), primary_key=True),
    )
    op.create_index("ix_snippet_tags_name", "snippet_tags", ["name"])

    op.create_table(
        "favorites",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(128), nullable=False),
        sa.Column("snippet_id", sa.String(36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("user_id", "snippet_id", name="uq_favorites_user_snippet"),
    )
    op.create_index("ix_favorites_user_id_created_at", "favorites", ["user_id", "created_at"])
    op.create_index("ix_favorites_snippet_id", "favorites", ["snippet_id"])


def downgrade() -> None:
    """Drop the snippet store."""
    op.drop_index("ix_favorites_snippet_id", table_name="favorites")
    op.drop_index("ix_favorites_user_id_created_at", table_name="favorites")
    op.drop_table("favorites")
    op.drop_index("ix_snippet_tags_name", table_name="snippet_tags")
    op.drop_table("snippet_tags")
    op.drop_index("ix_snippets_is_public", table_name="snippets")
    op.drop_index("ix_snippets_user_id_language", table_name="snippets")
    op.drop_index("ix_snippets_user_id_created_at", table_name="snippets")
    op.drop_table("snippets")
