"""Database Session Manager — async engine, per-request sessions and store-error mapping.

Invariants:
    - A session that exits with an exception is rolled back before close
    - Domain errors (StockroomError) pass through untouched; any other
      SQLAlchemyError becomes StoreError and the driver text stays in the logs
    - Server databases get a pre-pinged, recycled pool; SQLite gets the dialect
      default and its parent directory is created on demand
    - create_schema only creates missing tables, it never drops anything

Design Decisions:
    - Module-level db_manager set by init_db() from the FastAPI lifespan;
      readiness and seeding reach it directly, routes go through get_db
    - expire_on_commit=False: records are converted to frozen dataclasses after
      commit without lazy reloads
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from stockroom.core.errors import StockroomError, StoreError
from stockroom.db.base import Base
from stockroom import models  # noqa: F401  (populates Base.metadata)

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors.
_STORE_OPERATIONS: tuple[tuple[type[SQLAlchemyError], str], ...] = (
    (IntegrityError, "commit"),
    (OperationalError, "execute"),
    (DBAPIError, "query"),
    (SQLAlchemyError, "unknown"),
)


def _store_error(exc: SQLAlchemyError) -> StoreError:
    operation = next(op for kind, op in _STORE_OPERATIONS if isinstance(exc, kind))
    logger.error(f"Store failure during {operation}: {exc}")
    return StoreError(operation)


def engine_options(database_url: str, pool_size: int, max_overflow: int) -> dict:
    """Engine kwargs for the URL's backend."""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        return {}
    return {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


class DatabaseSessionManager:
    """Owns the engine and hands out sessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url, **engine_options(database_url, pool_size, max_overflow),
        )
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._session_factory() as session:
            try:
                yield session
            except StockroomError:
                await session.rollback()
                raise
            except SQLAlchemyError as exc:
                await session.rollback()
                raise _store_error(exc) from exc

    async def create_schema(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """True if a trivial query round-trips."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as exc:
            logger.error(f"Database health check failed: {exc}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
