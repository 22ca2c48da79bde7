"""Database engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import getLogger
from typing import Any

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from app.configs import file_logger, settings
from app.errors.base import BaseAppError
from app.errors.database import DatabaseConnectionError, DatabaseInitializationError

logger = file_logger(getLogger(__name__))

STATEMENT_TIMEOUT_MS = 30000


def _configure_engine_events(engine: AsyncEngine) -> None:
    """Configure connection pool events for monitoring."""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("New database connection established")

    @event.listens_for(engine.sync_engine, "checkout")
    def on_checkout(
        dbapi_connection: object,
        connection_record: object,
        connection_proxy: object,
    ) -> None:
        logger.debug("Connection checked out from pool")

    @event.listens_for(engine.sync_engine, "checkin")
    def on_checkin(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("Connection returned to pool")


def engine_kwargs(url: str) -> dict[str, Any]:
    """
    Build ``create_async_engine`` keyword arguments for a database URL.

    SQLite (local runs and tests) shares one connection so in-memory
    databases survive across sessions; everything else gets a sized pool
    and server-side statement timeouts.

    Args:
        url: SQLAlchemy database URL.

    Returns:
        dict[str, Any]: Engine keyword arguments.
    """
    if url.startswith("sqlite"):
        return {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    return {
        "pool_size": settings.POOL_SIZE,
        "max_overflow": settings.MAX_OVERFLOW,
        "pool_timeout": settings.POOL_TIMEOUT,
        "pool_recycle": settings.POOL_RECYCLE,
        "pool_pre_ping": True,
        "connect_args": {
            "command_timeout": STATEMENT_TIMEOUT_MS / 1000,
            "server_settings": {
                "statement_timeout": str(STATEMENT_TIMEOUT_MS),
                "lock_timeout": str(STATEMENT_TIMEOUT_MS),
            },
        },
    }


class Database:
    """
    Owner of the async engine and session factory.

    One instance is created at application startup and stored on
    ``app.state.database``; request handlers reach it through
    ``get_session``.
    """

    def __init__(self, url: str | None = None, *, echo: bool | None = None) -> None:
        self.url = url or settings.DATABASE_URL
        self.engine: AsyncEngine = create_async_engine(
            self.url,
            echo=settings.DATABASE_ECHO if echo is None else echo,
            **engine_kwargs(self.url),
        )
        if settings.DEBUG:
            _configure_engine_events(self.engine)

        self.session_maker: async_sessionmaker[SQLModelAsyncSession] = async_sessionmaker(
            self.engine,
            class_=SQLModelAsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def connect(self) -> None:
        """
        Verify the database answers, then create the schema.

        Raises:
            DatabaseConnectionError: If the database is unreachable.
            DatabaseInitializationError: If the schema cannot be created.
        """
        # Import all models to ensure they are registered
        from app.models import PostDB  # noqa: F401, PLC0415

        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            raise DatabaseConnectionError(
                detail=f"Failed to connect to the database: {e}",
            ) from e

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        except Exception as e:
            raise DatabaseInitializationError(
                detail=f"Failed to initialize database: {e}",
            ) from e
        logger.info("Database initialized successfully!")

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession]:
        """
        Context manager for explicit transaction management.

        Yields:
            AsyncSession: Database session within a transaction

        Example:
            ```python
            async with database.transaction() as session:
                session.add(PostDB(title="Hello", slug="hello", content="..."))
                # Commits on successful exit, rolls back on exception
            ```
        """
        async with self.session_maker() as session:
            try:
                yield session
                await session.commit()
            except BaseAppError:
                await session.rollback()
                raise
            except Exception:
                await session.rollback()
                logger.exception("Transaction error")
                raise

    async def close(self) -> None:
        """Dispose all pooled connections."""
        await self.engine.dispose()
        logger.info("Database connections closed")


async def get_session(request: Request) -> AsyncGenerator[AsyncSession]:
    """
    Dependency for getting async database sessions.

    Uses the ``Database`` created by the application lifespan.

    Yields:
        AsyncSession: Database session
    """
    database: Database = request.app.state.database
    async with database.transaction() as session:
        yield session
