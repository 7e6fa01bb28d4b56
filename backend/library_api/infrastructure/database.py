"""Database Session Manager — async connection pool with rollback and health checks.

Invariants:
    - Connection pool uses pool_pre_ping for stale connection detection
    - translate_store_errors() is the single place SQLAlchemy exceptions become
      StoreFailureError; the driver message goes to the log, never the client
    - The session is rolled back before the StoreFailureError propagates

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: rows read after commit stay usable in async context
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from library_api.core.errors import GENERIC_STORE_FAILURE, StoreFailureError

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages async database sessions with pooling and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 10, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session that is always closed."""
        session = self._session_factory()
        try:
            yield session
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


def _describe(exc: SQLAlchemyError) -> str:
    if isinstance(exc, IntegrityError):
        return "integrity constraint violated"
    if isinstance(exc, OperationalError):
        return "connection or operational error"
    if isinstance(exc, DBAPIError):
        return "driver error"
    return "operation failed"


@asynccontextmanager
async def translate_store_errors(
    db: AsyncSession,
    operation: str,
    public_message: str = GENERIC_STORE_FAILURE,
) -> AsyncGenerator[None, None]:
    """Map any SQLAlchemy failure inside the block to StoreFailureError."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(
            f"Store {operation} failed ({_describe(e)}): {e}",
            extra={"operation": operation, "error_code": "STORE_FAILURE"},
        )
        await db.rollback()
        raise StoreFailureError(public_message, operation) from e


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
