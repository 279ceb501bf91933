"""Database session management."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from snippetbox.core.config import settings


def get_database_url() -> str:
    """Get the database URL, ensuring the SQLite directory exists."""
    if settings.database_url:
        return settings.database_url

    config_path = settings.config_path
    if not config_path.exists():
        try:
            config_path.mkdir(parents=True, exist_ok=True)
        except OSError:
            # Fall back to local directory for development
            config_path = Path("./config")
            config_path.mkdir(parents=True, exist_ok=True)

    return f"sqlite+aiosqlite:///{config_path / 'snippetbox.db'}"


DATABASE_URL = get_database_url()
IS_SQLITE = DATABASE_URL.startswith("sqlite")

engine = create_async_engine(
    DATABASE_URL,
    echo=settings.debug,
    future=True,
    connect_args={"timeout": 30} if IS_SQLITE else {},
    pool_pre_ping=True,
)


def configure_sqlite_engine(async_engine: AsyncEngine) -> None:
    """Install SQLite connection hooks on an engine.

    The driver's implicit transaction handling is switched off and
    BEGIN IMMEDIATE is emitted explicitly. SAVEPOINTs nest inside the request
    transaction, and writers are serialized from their first statement, so a
    read-then-write sequence never hits a stale WAL snapshot.
    """

    @event.listens_for(async_engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        """Enable WAL mode and take over transaction control."""
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.execute("PRAGMA busy_timeout=30000")
        cursor.close()

    @event.listens_for(async_engine.sync_engine, "begin")
    def do_begin(conn):
        """Take the write lock up front."""
        conn.exec_driver_sql("BEGIN IMMEDIATE")


if IS_SQLITE:
    configure_sqlite_engine(engine)


async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database sessions.

    The session commits once the request handler returns and rolls back if it
    raises, so each request is a single transaction.

    Yields:
        An async database session.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
