"""
Database connection management.

Provides the async SQLAlchemy engine, session factory and FastAPI
dependency for database session injection.

Dependencies: sqlalchemy, ragchat.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ragchat.boundary.db.base import Base
from ragchat.configs import get_settings


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Create the async SQLAlchemy engine (once per process).

    pool_pre_ping=True verifies connections before use to detect stale or
    broken connections early. Pool sizing is skipped for SQLite, which does
    not support it.

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Usage:
        engine = get_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    db_config = get_settings().database

    if db_config.is_sqlite:
        return create_async_engine(db_config.async_database_url, echo=db_config.echo_sql)

    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory for database operations.

    autoflush=False and expire_on_commit=False keep ORM objects usable after
    the explicit commits the services perform.

    Returns:
        async_sessionmaker: Async session factory

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database session injection with automatic cleanup.

    Work that runs while a response is streaming opens its own session from
    get_async_session_factory() instead.

    Yields:
        AsyncSession: Async SQLAlchemy database session (scoped to request lifetime)
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        yield session


async def create_tables() -> None:
    """Create all tables (local development and tests; production uses migrations)."""
    # Import models so they register with Base.metadata
    from ragchat.boundary.db import models  # noqa: F401

    async with get_async_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
