"""Exception hierarchy for snippet and favorite operations.

Every error carries a machine-readable ``code`` and the HTTP status the API
layer reports it with. Errors that are not a ``SnippetboxError`` are treated
as internal failures.
"""

from __future__ import annotations


class SnippetboxError(Exception):
    """Base exception for domain errors."""

    status_code: int = 500

    def __init__(self, message: str, code: str = "SNIPPETBOX_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationFailedError(SnippetboxError):
    """Raised when input fails validation before storage is touched."""

    status_code = 400

    def __init__(self, errors: list[str], message: str = "Validation Error"):
        self.errors = errors
        super().__init__(message, "VALIDATION_ERROR")


class AuthenticationError(SnippetboxError):
    """Raised when the request carries no usable identity."""

    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, "UNAUTHENTICATED")


class SnippetNotFoundError(SnippetboxError):
    """Raised when a snippet id does not resolve."""

    status_code = 404

    def __init__(self, snippet_id: str, message: str = "Snippet not found"):
        self.snippet_id = snippet_id
        super().__init__(message, "NOT_FOUND")


class SnippetAccessDeniedError(SnippetboxError):
    """Raised when an authenticated user may not read or change a snippet."""

    status_code = 403

    def __init__(self, snippet_id: str, action: str = "access"):
        self.snippet_id = snippet_id
        self.action = action
        super().__init__(f"Not authorized to {action} this snippet", "FORBIDDEN")


class FavoriteConflictError(SnippetboxError):
    """Raised when a (user, snippet) favorite already exists."""

    status_code = 409

    def __init__(self, user_id: str, snippet_id: str):
        self.user_id = user_id
        self.snippet_id = snippet_id
        super().__init__("Snippet is already in favorites", "FAVORITE_EXISTS")
