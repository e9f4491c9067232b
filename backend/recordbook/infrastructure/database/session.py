"""Async engine and per-request session for the records database.

PostgreSQL (asyncpg) is the normal backend. SQLite (aiosqlite) works for
local runs and tests; an in-memory SQLite database is pinned to a single
connection so every session sees the same tables.
"""

import logging
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from recordbook.config import get_settings

logger = logging.getLogger(__name__)

_ASYNC_DRIVERS = {
    "sqlite://": "sqlite+aiosqlite://",
    "postgresql://": "postgresql+asyncpg://",
    "postgres://": "postgresql+asyncpg://",
}


def to_async_url(url: str) -> str:
    """Rewrite a plain database URL to use the matching async driver."""
    for prefix, async_prefix in _ASYNC_DRIVERS.items():
        if url.startswith(prefix):
            return async_prefix + url[len(prefix):]
    return url


def build_engine(url: str) -> AsyncEngine:
    async_url = to_async_url(url)
    options: dict[str, Any] = {}
    if async_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if ":memory:" in async_url or async_url.rstrip("/").endswith("sqlite+aiosqlite:"):
            options["poolclass"] = StaticPool
    else:
        options["pool_pre_ping"] = True
    # SQL echo is controlled through LOG_LEVEL_SQL, not here.
    return create_async_engine(async_url, **options)


engine = build_engine(get_settings().database_url)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request, committed on success."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            logger.debug("Rolling back request session")
            await session.rollback()
            raise
