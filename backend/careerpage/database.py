"""Database configuration and session management."""
import logging
from collections.abc import AsyncGenerator
from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from careerpage.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def _create_engine(database_url: Optional[str]) -> Optional[AsyncEngine]:
    if not database_url:
        logger.warning("DATABASE_URL is not configured. Reads will use the sample dataset.")
        return None
    return create_async_engine(
        database_url,
        echo=settings.debug,
        pool_pre_ping=True,
    )


engine: Optional[AsyncEngine] = _create_engine(settings.database_url)

AsyncSessionLocal: Optional[async_sessionmaker] = (
    async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    if engine is not None
    else None
)


async def get_db() -> AsyncGenerator[Optional[AsyncSession], None]:
    """FastAPI dependency to get a database session.

    Yields None when no database is configured; the persistence services
    treat that as an unavailable store.
    """
    if AsyncSessionLocal is None:
        yield None
        return

    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def close_db() -> None:
    """Dispose the engine on shutdown."""
    if engine is not None:
        await engine.dispose()
