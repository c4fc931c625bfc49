"""
PostBoard Backend: Database Engine and Session Management
=========================================================

What:  Async SQLAlchemy engine, session factory and declarative base.
Why:   Centralizes all database connection logic for the database store.
How:   create_app() builds one engine per application from its Settings and
       hands the session factory to each DatabaseStore. Nothing connects at
       import time, so the in-memory variant never touches a database.

Connection Pooling:
    PostgreSQL (asyncpg) gets a sized pool from settings. SQLite (aiosqlite)
    is left on SQLAlchemy's default pool, which rejects pool_size arguments.
"""

import logging
from typing import Any, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from postboard.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shared metadata is what create_all() and Alembic autogenerate read.
    """
    pass


def build_engine(app_settings: Settings) -> AsyncEngine:
    """Create the async engine for DATABASE_URL."""
    options: Dict[str, Any] = {
        # Echo SQL only when debugging
        "echo": app_settings.log_level == "DEBUG",
    }
    if not app_settings.database_url.startswith("sqlite"):
        options.update(
            pool_size=app_settings.db_pool_size,
            max_overflow=app_settings.db_max_overflow,
            pool_pre_ping=app_settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(app_settings.database_url, **options)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: rows stay readable after commit, outside the session
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_models(engine: AsyncEngine) -> None:
    """
    Create every mapped table that does not exist yet.

    Used at startup when DATABASE_AUTO_CREATE is on, and by the tests.
    Alembic (backend/alembic) is the alternative for managed schemas.
    """
    # Registers UserRow / PostRow on Base.metadata
    from postboard.models import PostRow, UserRow  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured: %s", ", ".join(sorted(Base.metadata.tables)))


async def dispose_engine(engine: AsyncEngine) -> None:
    """Close all pooled connections. Called from the lifespan on shutdown."""
    await engine.dispose()
