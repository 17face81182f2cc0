"""Database configuration and session management."""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from adminpanel.config import settings

logger = logging.getLogger(__name__)


def create_engine() -> AsyncEngine:
    """Create the async database engine."""
    # SQLite connections are bound to the event loop that opened them
    pool_class = NullPool if settings.is_development or settings.is_sqlite else None

    engine_kwargs = {
        "echo": settings.app_debug,
        "future": True,
    }

    if pool_class:
        engine_kwargs["poolclass"] = pool_class
    else:
        engine_kwargs["pool_size"] = settings.database_pool_size
        engine_kwargs["max_overflow"] = settings.database_max_overflow
        engine_kwargs["pool_pre_ping"] = True

    return create_async_engine(settings.async_database_url, **engine_kwargs)


# Global engine instance
engine = create_engine()

# Session factory
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields a database session."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db() -> None:
    """Initialize database (create tables if needed)."""
    from adminpanel.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def check_connectivity() -> bool:
    """Ensure the schema exists and the database answers a trivial query.

    Failures are logged rather than raised so the application keeps serving
    and reports storage errors per request.
    """
    try:
        await init_db()
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Database error: {e}")
        return False

    logger.info(f"Database connected ({engine.url.get_backend_name()})")
    return True


async def close_db() -> None:
    """Close database connections."""
    await engine.dispose()
