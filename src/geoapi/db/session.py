from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import MetaData
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from geoapi.config import Settings

# Naming conventions for database constraints.
# Without these, Alembic can't autogenerate consistent constraint names across migrations.
NAMING_CONVENTION: dict[str, str] = {
    "ix": "ix_%(column_0_label)s",  # Index
    "uq": "uq_%(table_name)s_%(column_0_name)s",  # Unique constraint
    "ck": "ck_%(table_name)s_%(constraint_name)s",  # Check constraint
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",  # Foreign key
    "pk": "pk_%(table_name)s",  # Primary key
}


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models.

    All models inherit from this class. SQLAlchemy uses Base.metadata to track
    all registered models and their table schemas.

    The naming_convention ensures all constraints have predictable names,
    which is critical for Alembic migrations to work correctly.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def build_engine(settings: Settings) -> AsyncEngine:
    """Async engine with connection pooling.

    The engine manages a pool of database connections that are reused across
    requests. Pool and asyncpg options only apply to PostgreSQL; SQLite (used
    for local runs and tests) gets SQLAlchemy's defaults.
    """
    url = make_url(settings.database_url)
    if url.get_backend_name() == "sqlite":
        return create_async_engine(url, echo=settings.db_echo)

    return create_async_engine(
        url,
        pool_size=settings.db_pool_size,  # Persistent connections
        max_overflow=settings.db_max_overflow,  # Extra connections under load
        pool_timeout=settings.db_pool_timeout,  # Wait time for available connection
        pool_recycle=settings.db_pool_recycle,  # Max connection age (prevents stale connections)
        pool_pre_ping=settings.db_pool_pre_ping,  # Test connection before checkout
        echo=settings.db_echo,  # SQL logging
        # asyncpg driver options — passed directly to asyncpg.connect()
        connect_args={"command_timeout": settings.db_statement_timeout},  # Kill slow queries
    )


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False keeps objects usable after commit without re-querying.
    # This is important for async because accessing expired attributes would trigger sync I/O.
    return async_sessionmaker(engine, expire_on_commit=False)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that provides a database session per request.

    Services commit explicitly through ``repositories.base.save_changes``.
    Anything still uncommitted when the request ends, because of an error or a
    cancelled request, is rolled back when the session closes, so a write is
    either fully visible or not at all.
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.sessionmaker
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def shutdown(engine: AsyncEngine) -> None:
    """Graceful shutdown — close all pooled database connections.

    Call this in FastAPI's lifespan context manager on shutdown.
    Ensures connections are properly closed before the process exits.
    """
    await engine.dispose()
