"""Database session configuration"""

import logging
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.config import (
    DATABASE_URL,
    DB_MAX_OVERFLOW,
    DB_POOL_RECYCLE,
    DB_POOL_SIZE,
    DB_POOL_TIMEOUT,
)
from app.db.base import Base

logger = logging.getLogger(__name__)


def to_async_url(url: str) -> str:
    """
    Convert a database URL to its async driver form.

    postgresql:// and postgresql+asyncpg:// become postgresql+psycopg://,
    sqlite:// becomes sqlite+aiosqlite://. Already-async URLs pass through.
    """
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    if url.startswith("postgresql+asyncpg://"):
        # Legacy support: convert asyncpg URLs to psycopg
        return url.replace("postgresql+asyncpg://", "postgresql+psycopg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    if url.startswith(("postgresql+psycopg://", "sqlite+aiosqlite://")):
        return url
    raise ValueError(f"Unsupported database URL format: {url}")


def _create_engine(url: str) -> AsyncEngine:
    async_url = to_async_url(url)

    if async_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in async_url or async_url.endswith("sqlite+aiosqlite://"):
            # Every connection must see the same in-memory database
            kwargs["poolclass"] = StaticPool
        new_engine = create_async_engine(async_url, echo=False, **kwargs)
    else:
        new_engine = create_async_engine(
            async_url,
            pool_pre_ping=True,  # Verify connections before using them
            pool_size=DB_POOL_SIZE,
            max_overflow=DB_MAX_OVERFLOW,
            pool_timeout=DB_POOL_TIMEOUT,
            pool_recycle=DB_POOL_RECYCLE,
            echo=False,
        )

    @event.listens_for(new_engine.sync_engine, "connect")
    def on_connect(dbapi_conn, connection_record):
        """Log when a new connection is created"""
        logger.debug("New database connection created")

    @event.listens_for(new_engine.sync_engine, "invalidate")
    def on_invalidate(dbapi_conn, connection_record, exception):
        """Log when a connection is invalidated"""
        logger.warning(
            f"Database connection invalidated: {exception}",
            exc_info=exception
        )

    return new_engine


engine: AsyncEngine = _create_engine(DATABASE_URL)

SessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
)


def configure_engine(url: str) -> AsyncEngine:
    """
    Point the application at a different database.

    Rebuilds the module-level engine and session factory; used by tests to
    switch to an in-memory SQLite database.
    """
    global engine, SessionLocal

    engine = _create_engine(url)
    SessionLocal = async_sessionmaker(
        engine,
        class_=AsyncSession,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    logger.info(f"Database engine configured for {engine.url.render_as_string(hide_password=True)}")
    return engine


async def init_db() -> None:
    """Create all tables that do not exist yet"""
    # Import models so they register on Base.metadata
    from app.db import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    await engine.dispose()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function for FastAPI routes.

    Usage:
        @app.get("/example")
        async def example(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with SessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
