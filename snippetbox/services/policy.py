"""Ownership and visibility rules for snippets."""

from __future__ import annotations

from sqlalchemy import ColumnElement, or_

from snippetbox.core.exceptions import SnippetAccessDeniedError, SnippetNotFoundError
from snippetbox.db.models import Snippet


def can_read(snippet: Snippet, user_id: str) -> bool:
    """Owners read their own snippets; everyone reads public ones."""
    return snippet.user_id == user_id or snippet.is_public


def can_write(snippet: Snippet, user_id: str) -> bool:
    """Only the owner may update or delete a snippet."""
    return snippet.user_id == user_id


def ensure_readable(snippet: Snippet | None, snippet_id: str, user_id: str, action: str = "access") -> Snippet:
    """Return the snippet if the user may read it.

    Raises:
        SnippetNotFoundError: If the snippet does not exist (checked first).
        SnippetAccessDeniedError: If the snippet is private to someone else.
    """
    if snippet is None:
        raise SnippetNotFoundError(snippet_id)
    if not can_read(snippet, user_id):
        raise SnippetAccessDeniedError(snippet_id, action)
    return snippet


def ensure_writable(snippet: Snippet | None, snippet_id: str, user_id: str, action: str = "update") -> Snippet:
    """Return the snippet if the user owns it.

    Raises:
        SnippetNotFoundError: If the snippet does not exist (checked first).
        SnippetAccessDeniedError: If the user is not the owner.
    """
    if snippet is None:
        raise SnippetNotFoundError(snippet_id)
    if not can_write(snippet, user_id):
        raise SnippetAccessDeniedError(snippet_id, action)
    return snippet


def visible_to(user_id: str) -> ColumnElement[bool]:
    """SQL form of ``can_read`` for list queries."""
    return or_(Snippet.user_id == user_id, Snippet.is_public.is_(True))
