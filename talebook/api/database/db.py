"""PostgreSQL connection management.

The schema is declared with SQLAlchemy and created at startup through an
async engine; request-time queries go through an asyncpg pool.
"""

from typing import Optional

import asyncpg
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import DeclarativeBase

from ..config import DATABASE_URL, DB_POOL_MAX_SIZE, DB_POOL_MIN_SIZE, get_asyncpg_dsn


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all models."""

    pass


# Global asyncpg pool (set during API startup)
_pool: Optional[asyncpg.Pool] = None


def _check_configured():
    """Raise an error if the database is not configured."""
    if not DATABASE_URL:
        raise RuntimeError(
            "Database not configured. Set DATABASE_URL environment variable "
            "to a PostgreSQL connection string."
        )


async def init_db() -> None:
    """Initialize database - create all tables."""
    _check_configured()
    # Register models on Base.metadata
    from . import models  # noqa: F401

    engine = create_async_engine(DATABASE_URL, echo=False)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


async def open_pool() -> asyncpg.Pool:
    """Create the asyncpg pool. Called during API startup."""
    global _pool
    _check_configured()
    if _pool is None:
        _pool = await asyncpg.create_pool(
            get_asyncpg_dsn(),
            min_size=DB_POOL_MIN_SIZE,
            max_size=DB_POOL_MAX_SIZE,
        )
    return _pool


def get_pool() -> asyncpg.Pool:
    """Get the asyncpg pool. Raises if not initialized."""
    if _pool is None:
        raise RuntimeError(
            "Database pool not initialized. Ensure the API server is running."
        )
    return _pool


async def close_pool() -> None:
    """Close the asyncpg pool. Called during API shutdown."""
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None
