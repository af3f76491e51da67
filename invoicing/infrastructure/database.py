"""Database Session Manager — async engine, per-request sessions, readiness ping.

Invariants:
    - A session that raises is rolled back before the error leaves the context
    - Any SQLAlchemyError escaping a session becomes DataAccessError; the driver
      message goes to the log only
    - Postgres engines use pool_pre_ping; SQLite engines get the dialect's own pool
    - SQLite connections enforce foreign keys, so ON DELETE SET NULL behaves as on Postgres

Design Decisions:
    - db_manager is a module global assigned in the lifespan; readers go through the
      module (`database.db_manager`) so tests can swap it
    - expire_on_commit=False: ORM rows returned by repositories stay readable after
      the commit that produced them
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from invoicing.config import Settings
from invoicing.core.errors import DataAccessError

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors.
_FAILURE_KINDS: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Integrity constraint violated", "commit"),
    (OperationalError, "Database unreachable", "connect"),
    (DBAPIError, "Database driver error", "execute"),
    (SQLAlchemyError, "Database operation failed", "session"),
)


def _classify(exc: SQLAlchemyError) -> tuple[str, str]:
    for kind, message, operation in _FAILURE_KINDS:
        if isinstance(exc, kind):
            return message, operation
    return "Database operation failed", "session"


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class DatabaseSessionManager:
    """Owns the engine and hands out sessions that never leak a half-done transaction."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        options: dict = {}
        if not database_url.startswith("sqlite"):
            options = {
                "pool_pre_ping": True,
                "pool_size": pool_size,
                "max_overflow": max_overflow,
                "pool_recycle": 3600,
            }
        self.engine = create_async_engine(database_url, **options)
        if database_url.startswith("sqlite"):
            enable_sqlite_foreign_keys(self.engine)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "DatabaseSessionManager":
        return cls(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            message, operation = _classify(e)
            logger.error(
                f"{message}: {e}",
                extra={"operation": operation, "error_code": "DATA_ACCESS_ERROR"},
            )
            raise DataAccessError(message, operation) from e
        except BaseException:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True when a trivial query round-trips."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except (DataAccessError, OSError) as e:
            logger.warning(f"Database ping failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(settings: Settings) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager.from_settings(settings)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
