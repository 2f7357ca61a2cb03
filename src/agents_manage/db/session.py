"""Async database session factory and utilities."""

from collections.abc import AsyncGenerator
from typing import Any

import structlog
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from .models.base import Base

logger = structlog.get_logger()


def _enable_sqlite_pragmas(engine: AsyncEngine) -> None:
    """Turn on foreign keys and savepoint support for SQLite connections.

    The driver's implicit transaction handling is disabled so that BEGIN and
    SAVEPOINT are issued by SQLAlchemy itself.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")


class DatabaseSessionManager:
    """Manages database engine and session creation.

    A single engine instance is shared across the application.

    Attributes:
        engine: SQLAlchemy async engine instance
        session_factory: Factory for creating async sessions
    """

    def __init__(
        self,
        database_url: str,
        pool_size: int = 10,
        max_overflow: int = 20,
        **engine_kwargs: Any,
    ) -> None:
        """Initialize database session manager.

        Args:
            database_url: Async connection URL (postgresql+asyncpg:// or sqlite+aiosqlite://)
            pool_size: Number of persistent connections in the pool (ignored for SQLite)
            max_overflow: Max additional connections beyond pool_size (ignored for SQLite)
            **engine_kwargs: Additional arguments passed to create_async_engine
        """
        url = make_url(database_url)
        self.is_sqlite = url.get_backend_name() == "sqlite"

        if self.is_sqlite:
            if url.database in (None, "", ":memory:"):
                # One shared connection, otherwise each checkout sees an empty database
                engine_kwargs.setdefault("poolclass", StaticPool)
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
            self.engine: AsyncEngine = create_async_engine(database_url, **engine_kwargs)
            _enable_sqlite_pragmas(self.engine)
        else:
            self.engine = create_async_engine(
                database_url,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=True,  # Verify connections before use
                pool_recycle=3600,  # Recycle connections after 1 hour
                **engine_kwargs,
            )

        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def close(self) -> None:
        """Close database engine and all connections."""
        if self.engine:
            await self.engine.dispose()

    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get async database session.

        Yields:
            AsyncSession: Database session instance
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def create_all(self) -> None:
        """Create all tables defined in Base metadata.

        Meant for tests and local SQLite setups. Other databases should
        be managed with the Alembic migrations.
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        """Drop all tables defined in Base metadata.

        WARNING: This will delete all data. Only use for testing.
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def ping(self) -> bool:
        """Check that the database answers a trivial query.

        Returns:
            True if the database is reachable
        """
        async with self.engine.connect() as conn:
            await conn.exec_driver_sql("SELECT 1")
        return True


# Global session manager instance (initialized via init_db())
session_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs: Any) -> DatabaseSessionManager:
    """Initialize the global database session manager.

    Args:
        database_url: Async connection URL
        **kwargs: Passed to DatabaseSessionManager

    Returns:
        The new session manager

    Raises:
        RuntimeError: If already initialized
    """
    global session_manager
    if session_manager is not None:
        raise RuntimeError("DatabaseSessionManager already initialized")
    session_manager = DatabaseSessionManager(database_url, **kwargs)
    logger.info("database_initialized", backend=session_manager.engine.dialect.name)
    return session_manager


async def close_db() -> None:
    """Close the global database session manager."""
    global session_manager
    if session_manager is not None:
        await session_manager.close()
        session_manager = None


def get_session_manager() -> DatabaseSessionManager:
    """Get the global session manager instance.

    Returns:
        DatabaseSessionManager: Global session manager

    Raises:
        RuntimeError: If session manager is not initialized
    """
    if session_manager is None:
        raise RuntimeError(
            "DatabaseSessionManager not initialized. "
            "Call init_db() first in your application startup."
        )
    return session_manager


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for getting database sessions.

    Yields:
        AsyncSession: Database session instance
    """
    manager = get_session_manager()
    async for session in manager.get_session():
        yield session
