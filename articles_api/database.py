import asyncio
import logging
from collections.abc import AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from articles_api.config import Settings
from articles_api.errors import StorageError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine described by *settings* (no connection is opened)."""
    url = settings.sqlalchemy_url
    connect_args: dict = {}
    # asyncpg bounds every statement with command_timeout; a timed out
    # statement surfaces from the repository as StorageError.
    if settings.DB_COMMAND_TIMEOUT is not None and url.startswith("postgresql+asyncpg"):
        connect_args["command_timeout"] = settings.DB_COMMAND_TIMEOUT
    return create_async_engine(
        url,
        echo=settings.DB_ECHO,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def wait_for_database(engine: AsyncEngine, retries: int = 5, delay: float = 2.0) -> None:
    """
    Block until *engine* accepts a ``SELECT 1``.

    Tries up to *retries* times, sleeping *delay* seconds between
    attempts, and raises ``StorageError`` once every attempt has failed.
    Covers the window where the application starts before the database.
    """
    attempts = max(retries, 1)
    last_error: Exception | None = None
    for attempt in range(1, attempts + 1):
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("Database reachable after %d attempt(s)", attempt)
            return
        except (SQLAlchemyError, OSError) as exc:
            last_error = exc
            logger.warning(
                "Failed to connect to database (attempt %d/%d): %s", attempt, attempts, exc
            )
            if attempt < attempts:
                await asyncio.sleep(delay)
    raise StorageError(
        "connect", f"failed to connect to database after {attempts} attempts"
    ) from last_error


async def init_models(engine: AsyncEngine) -> None:
    """Create any missing tables for the registered ORM models."""
    import articles_api.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    Yield one session per request from the application's session factory.

    Repositories own their commits; anything escaping the request rolls
    the session back.
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
