"""
SimpleNote: Database Engine & Session Factory
=============================================

What:  Async SQLAlchemy engine construction, session factory, and ORM base.
How:   `build_engine()` creates an async engine with connection pooling from
       `Settings`; `build_session_factory()` wraps it in an async_sessionmaker.
Who:   Called once by `SQLNoteStore`; nothing else opens connections.

Connection Pooling:
    pool_size / max_overflow:  from settings (PostgreSQL only)
    pool_pre_ping:             validates connections before use
    pool_recycle=3600:         recycles connections every hour

    SQLite URLs (used in tests) get SQLAlchemy's default pool for the
    dialect, which rejects the sizing arguments.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from simplenote.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Its metadata is what `SQLNoteStore.ensure_schema()` creates.
    """
    pass


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine (and its connection pool) for `settings`."""
    kwargs = {
        # SQL echo is noisy; only useful while debugging
        "echo": settings.log_level == "DEBUG",
    }
    if not settings.is_sqlite:
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(settings.database_url, **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to `engine`.

    expire_on_commit=False keeps loaded attributes readable after commit,
    outside the session context.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
