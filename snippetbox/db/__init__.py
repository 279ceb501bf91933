"""Database package for Snippetbox."""

from snippetbox.db.base import Base
from snippetbox.db.session import async_session_maker, engine, get_db

__all__ = [
    "Base",
    "async_session_maker",
    "engine",
    "get_db",
]
