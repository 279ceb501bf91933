"""Database models for Snippetbox."""

from snippetbox.db.models.enums import SnippetLanguage
from snippetbox.db.models.favorite import Favorite
from snippetbox.db.models.snippet import Snippet
from snippetbox.db.models.snippet_tag import SnippetTag

__all__ = [
    # Models
    "Favorite",
    "Snippet",
    "SnippetTag",
    # Enums
    "SnippetLanguage",
]
