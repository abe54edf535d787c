"""Database connection and session management.

Provides the async engine, the session factory and the error translation
shared by the PostgreSQL repositories.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import logfire
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from presence.config import Settings
from presence.domain.error import StoreUnavailableError


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
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


@asynccontextmanager
async def store_operation(session: AsyncSession, operation: str) -> AsyncIterator[None]:
    """Run one atomic store operation and commit it.

    Each reconciliation write is its own unit of work, so steps that already
    ran stay committed if a later step fails or the request is cancelled.
    Database errors roll the session back and surface as
    StoreUnavailableError.

    Args:
        session: Request-scoped session
        operation: Name used in logs and errors
    """
    try:
        yield
        await session.commit()
    except SQLAlchemyError as e:
        logfire.warn("Store operation failed", operation=operation, error=str(e))
        await session.rollback()
        raise StoreUnavailableError(f"{operation} failed: {e}") from e


@asynccontextmanager
async def store_read(session: AsyncSession, operation: str) -> AsyncIterator[None]:
    """Translate database errors of a read into StoreUnavailableError."""
    try:
        yield
    except SQLAlchemyError as e:
        logfire.warn("Store read failed", operation=operation, error=str(e))
        await session.rollback()
        raise StoreUnavailableError(f"{operation} failed: {e}") from e
