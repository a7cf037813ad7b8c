"""Database session management."""

from typing import AsyncGenerator

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import settings

logger = structlog.get_logger()

# Transaction-mode poolers (pgbouncer, Supavisor) break asyncpg's
# prepared statement cache.
_connect_args: dict = {}
if "pooler" in settings.database_url or "pgbouncer" in settings.database_url:
    _connect_args["statement_cache_size"] = 0

# Create async engine
engine = create_async_engine(
    settings.async_database_url,
    echo=settings.debug,
    pool_pre_ping=True,
    pool_size=settings.db_pool_min_size,
    max_overflow=max(settings.db_pool_max_size - settings.db_pool_min_size, 0),
    pool_recycle=settings.db_pool_idle_timeout,
    connect_args=_connect_args,
)

# Create async session factory
async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def check_connection(db_engine: AsyncEngine = engine) -> None:
    """Run a trivial query so a bad DATABASE_URL fails at startup."""
    logger.info("database_connecting", url=db_engine.url.render_as_string(hide_password=True))
    async with db_engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    logger.debug("database_connected")


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database sessions."""
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
