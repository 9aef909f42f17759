# backend/app/db/session.py
"""
Async engine and session factory.

PostgreSQL runs through asyncpg with a connection pool; SQLite runs through
aiosqlite without one, and turns on foreign key enforcement on every
connection so deleting a user or organization cascades to its personal
secrets, as it does on PostgreSQL.
"""
from typing import AsyncGenerator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, AsyncAdaptedQueuePool

from backend.app.core.config import is_sqlite_url, settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(database_url: Optional[str] = None, echo: Optional[bool] = None) -> AsyncEngine:
    """
    Create and configure an async SQLAlchemy engine.

    SQLite (local development, tests):
    - Uses NullPool (SQLite doesn't support connection pooling well)
    - check_same_thread=False for async compatibility
    - PRAGMA foreign_keys=ON on every connection

    PostgreSQL (production):
    - AsyncAdaptedQueuePool with pool_size=5, max_overflow=10
    - pool_pre_ping=True to detect stale connections
    - pool_recycle=300 to recycle connections every 5 minutes

    Returns:
        Configured AsyncEngine instance
    """
    url = database_url or settings.DATABASE_URL
    echo = settings.DATABASE_ECHO if echo is None else echo

    if is_sqlite_url(url):
        sqlite_engine = create_async_engine(
            url,
            echo=echo,
            poolclass=NullPool,
            connect_args={"check_same_thread": False},
        )
        event.listen(sqlite_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return sqlite_engine

    return create_async_engine(
        url,
        echo=echo,
        poolclass=AsyncAdaptedQueuePool,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        pool_recycle=300,
    )


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Build a session factory for the given engine.

    expire_on_commit=False: model attributes stay readable after commit
    autoflush=False: explicit flush control, no surprise queries
    """
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Global async engine and session factory
# Created once at module load, reused across all requests
# ─────────────────────────────────────────────────────────────────────────────
engine: AsyncEngine = create_engine()

AsyncSessionLocal: async_sessionmaker[AsyncSession] = create_session_factory(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for database sessions.

    Usage in FastAPI endpoints:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...

    Creates one session per request and closes it afterwards, even if the
    endpoint raises. Does NOT auto-commit; the store commits explicitly.
    """
    async with AsyncSessionLocal() as session:
        yield session
