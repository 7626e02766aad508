"""Async SQLAlchemy session factory."""
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from core.config import get_settings


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """
    Turn on foreign key enforcement for every new SQLite connection.

    SQLite ignores ON DELETE CASCADE unless the pragma is set per connection.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection: Any, _connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str, echo: bool = False, **kwargs: Any) -> AsyncEngine:
    """Create an async engine, applying SQLite-specific setup where needed."""
    if database_url.startswith("sqlite"):
        kwargs.setdefault("poolclass", NullPool)
        engine = create_async_engine(database_url, echo=echo, **kwargs)
        enable_sqlite_foreign_keys(engine)
        return engine
    return create_async_engine(database_url, echo=echo, pool_pre_ping=True, **kwargs)


settings = get_settings()

engine = build_engine(settings.async_database_url, echo=settings.db_echo)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """
    Yield an async database session.

    Uses unit-of-work pattern: services use flush() for refreshing objects,
    commit happens once here at request end. This ensures atomic transactions
    per request - if anything fails, all changes are rolled back.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
