"""Engine, session factory and schema utilities.

Nothing here is cached at module level: callers build an engine from a
URL, hand the session maker to the repository, and dispose the engine
when they are done.
"""

import logging

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

# Import models to register with AuthBase.metadata
import gatekeep.persistence.sqlalchemy.models  # noqa: F401
from gatekeep.persistence.sqlalchemy.base import AuthBase

logger = logging.getLogger(__name__)

# Seconds a SQLite connection waits for a competing writer to commit
SQLITE_BUSY_TIMEOUT = 30


def create_database_engine(database_url: str, *, echo: bool = False) -> AsyncEngine:
    """Create an async engine for the credential database."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["timeout"] = SQLITE_BUSY_TIMEOUT

    return create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory handed to CredentialRepositorySQLAlchemy."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all credential tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    logger.info("Ensuring credential tables exist...")
    async with engine.begin() as conn:
        await conn.run_sync(AuthBase.metadata.create_all)
    logger.info("Database schema is up to date")


async def drop_tables(engine: AsyncEngine) -> None:
    """
    Drop all credential tables (USE WITH CAUTION!).

    This is primarily for testing and development reset scenarios.
    """
    logger.warning("Dropping all credential tables...")
    async with engine.begin() as conn:
        await conn.run_sync(AuthBase.metadata.drop_all)
    logger.info("Credential tables dropped")
