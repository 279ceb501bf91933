"""Enum types for database models."""

from __future__ import annotations

import enum


class SnippetLanguage(str, enum.Enum):
    """Languages a snippet can be tagged with."""

    JAVASCRIPT = "javascript"
    PYTHON = "python"
    JAVA = "java"
    CPP = "cpp"
    HTML = "html"
    CSS = "css"
    TEXT = "text"
    MARKDOWN = "markdown"
    JSON = "json"
    SQL = "sql"
    BASH = "bash"
    GO = "go"
    RUST = "rust"
