"""SQLAlchemy declarative base shared by snippet and favorite models."""

from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all Snippetbox models."""

    pass
