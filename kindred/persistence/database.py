"""Database connection and session management.

Provides the async engine, the session factory and the error translation
shared by the PostgreSQL repositories. Each repository call runs in its
own short transaction so a committed write is immediately visible to
every other request.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from kindred.config import Settings
from kindred.domain.error import StoreUnavailableError
from kindred.util.logging import get_logger

logger = get_logger(__name__)


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        connect_args={"command_timeout": settings.database.command_timeout},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=False,
    )


@asynccontextmanager
async def store_call(
    session_factory: async_sessionmaker[AsyncSession], operation: str
) -> AsyncGenerator[AsyncSession, None]:
    """Run one store call in its own transaction.

    Commits on success, rolls back on error, and turns driver failures and
    timeouts into StoreUnavailableError. Domain errors raised inside the
    block pass through unchanged.

    Args:
        session_factory: Factory for creating sessions
        operation: Name used in logs and errors

    Yields:
        Database session with an open transaction
    """
    try:
        async with session_factory() as session:
            async with session.begin():
                yield session
    except (asyncio.TimeoutError, TimeoutError, OSError) as e:
        logger.warning(f"Store call {operation} timed out or lost connection: {e}")
        raise StoreUnavailableError(operation, type(e).__name__) from e
    except (OperationalError, DBAPIError) as e:
        logger.warning(f"Store call {operation} failed: {e}")
        raise StoreUnavailableError(operation, type(e).__name__) from e
