"""Async database session factory and FastAPI dependency.

Supports both PostgreSQL (production) and SQLite (local dev and tests).
"""

from collections.abc import AsyncGenerator
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from subscore.config import async_database_url, get_settings


def is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine for a configured database URL."""
    url = async_database_url(database_url)
    if not is_sqlite(url):
        return create_async_engine(url, echo=echo, pool_pre_ping=True)

    # SQLite: ensure the data directory exists
    db_path = url.split("///")[-1]
    if db_path and db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    # One connection per session; aiosqlite connections are not shared across event loops
    return create_async_engine(
        url, echo=echo, poolclass=NullPool, connect_args={"check_same_thread": False}
    )


settings = get_settings()

engine = build_engine(settings.database_url, echo=settings.debug)

async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that yields an async database session."""
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
