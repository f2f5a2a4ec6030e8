"""
Database engine and sessions.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from loguru import logger
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from refnet.config.settings import settings
from refnet.models import Base


def create_engine(url: str | None = None, echo: bool | None = None) -> AsyncEngine:
    """Create async engine (settings.database_url by default)."""
    return create_async_engine(
        url or settings.database_url,
        echo=settings.database_echo if echo is None else echo,
    )


def create_session_maker(
    engine: AsyncEngine | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Create session maker. Objects stay usable after commit."""
    if engine is None:
        engine = create_engine()
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@asynccontextmanager
async def session_scope(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Session that is rolled back if the block raises."""
    async with session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_models(engine: AsyncEngine) -> None:
    """Create all tables and indexes (checkfirst)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    logger.info("Database tables initialized")


__all__ = [
    "create_engine",
    "create_session_maker",
    "init_models",
    "session_scope",
]
