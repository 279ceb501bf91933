"""Tests for ownership and visibility rules."""

import pytest

from snippetbox.core.exceptions import SnippetAccessDeniedError, SnippetNotFoundError
from snippetbox.db.models import Snippet
from snippetbox.services.policy import can_read, can_write, ensure_readable, ensure_writable


def _snippet(user_id: str = "alice", is_public: bool = False) -> Snippet:
    return Snippet(
        id="snip-1",
        title="t",
        content="c",
        user_id=user_id,
        user_email=f"{user_id}@example.com",
        is_public=is_public,
    )


class TestCanRead:
    """Tests for the read rule."""

    def test_owner_reads_private(self):
        assert can_read(_snippet(), "alice") is True

    def test_other_user_cannot_read_private(self):
        assert can_read(_snippet(), "bob") is False

    def test_anyone_reads_public(self):
        assert can_read(_snippet(is_public=True), "bob") is True


class TestCanWrite:
    """Tests for the write rule."""

    def test_owner_can_write(self):
        assert can_write(_snippet(), "alice") is True

    def test_public_does_not_grant_write(self):
        assert can_write(_snippet(is_public=True), "bob") is False


class TestEnsure:
    """Tests for the raising helpers."""

    def test_missing_snippet_is_not_found(self):
        """Test that existence is checked before ownership."""
        with pytest.raises(SnippetNotFoundError):
            ensure_writable(None, "missing", "bob")

    def test_readable_returns_snippet(self):
        snippet = _snippet(is_public=True)
        assert ensure_readable(snippet, snippet.id, "bob") is snippet

    def test_private_snippet_is_forbidden_for_others(self):
        with pytest.raises(SnippetAccessDeniedError) as exc_info:
            ensure_readable(_snippet(), "snip-1", "bob", action="favorite")
        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "Not authorized to favorite this snippet"

    def test_public_snippet_is_not_writable_by_others(self):
        with pytest.raises(SnippetAccessDeniedError) as exc_info:
            ensure_writable(_snippet(is_public=True), "snip-1", "bob", action="delete")
        assert exc_info.value.action == "delete"
