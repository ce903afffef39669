"""Async SQLAlchemy engine, session factory and declarative base."""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from personal_finance.core.config import settings
from personal_finance.core.logging import get_logger

logger = get_logger("database")


def _engine_options(database_url: str) -> dict[str, Any]:
    """Pool options for the configured backend.

    SQLite (used by the test suite) opens a fresh file connection per
    session instead of pooling, so no connection outlives its event loop.
    """
    if database_url.startswith("sqlite"):
        return {"poolclass": NullPool}
    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_timeout": settings.db_pool_timeout,
        "pool_recycle": settings.db_pool_recycle,
        "pool_pre_ping": True,
    }


engine = create_async_engine(
    settings.database_url,
    echo=settings.debug and settings.log_level == "DEBUG",
    **_engine_options(settings.database_url),
)

async_session_maker = async_sessionmaker(engine, expire_on_commit=False)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session; commits when the endpoint returns normally."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except BaseException:
            # Includes asyncio.CancelledError so cancelled requests roll back too
            await session.rollback()
            raise


async def check_db_connection() -> bool:
    """Round-trip a trivial query; False if the database cannot be reached."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"Database unreachable: {e}")
        return False
    return True
