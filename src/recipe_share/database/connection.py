"""Async SQLAlchemy engine and session factory management.

This module provides:
- Engine and session factory lifecycle via lifespan events
- Optional schema creation for development and tests
- A liveness probe for the readiness endpoint
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from recipe_share.database.models import Base
from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_share.core.config import Settings

logger = get_logger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Build an async engine for ``settings.database_url``.

    SQLite URLs (used by tests and local runs) get a single shared connection
    and foreign-key enforcement; everything else gets a sized pool and a
    statement timeout.
    """
    url = settings.database_url
    db = settings.database

    if url.startswith("sqlite"):
        engine = create_async_engine(
            url,
            echo=db.echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        url,
        echo=db.echo,
        pool_pre_ping=True,
        pool_recycle=3600,
        pool_size=db.pool_size,
        max_overflow=db.max_overflow,
        connect_args={"command_timeout": db.command_timeout},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Sessions keep loaded attributes after commit so responses can be built."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create every table registered on the ORM metadata."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def init_database(settings: Settings) -> None:
    """Create the engine and session factory.

    Should be called during application startup (lifespan).
    """
    global _engine, _session_factory  # noqa: PLW0603

    logger.info(
        "Initializing database engine",
        host=settings.database.host,
        database=settings.database.name,
    )

    _engine = create_engine_from_settings(settings)
    _session_factory = create_session_factory(_engine)

    if settings.observability.tracing.enabled:
        from recipe_share.observability.tracing import instrument_engine

        instrument_engine(_engine)

    try:
        if settings.database.create_schema:
            await create_schema(_engine)
            logger.info("Database schema ensured")
        async with _engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Failed to connect to database")
        raise

    logger.info("Database connection established successfully")


async def close_database() -> None:
    """Dispose of the engine and its pooled connections."""
    global _engine, _session_factory  # noqa: PLW0603

    if _engine is not None:
        await _engine.dispose()
        logger.info("Database engine disposed")
    _engine = None
    _session_factory = None


def get_engine() -> AsyncEngine:
    """Return the engine, raising ``RuntimeError`` before startup."""
    if _engine is None:
        msg = "Database not initialized. Call init_database() first."
        raise RuntimeError(msg)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the session factory, raising ``RuntimeError`` before startup."""
    if _session_factory is None:
        msg = "Database not initialized. Call init_database() first."
        raise RuntimeError(msg)
    return _session_factory


async def check_database_health() -> dict[str, str]:
    """Probe the database with ``SELECT 1``."""
    if _engine is None:
        return {"database": "not_initialized"}
    try:
        async with _engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database health check failed", error=str(e))
        return {"database": "unhealthy"}
    return {"database": "healthy"}
