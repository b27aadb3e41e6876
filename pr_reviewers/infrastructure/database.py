"""Database — process-wide engine and the transaction-manager dependency.

Invariants:
    - One AsyncEngine per process, created by init_db in the app lifespan
    - Routes never see a session: they receive a SqlAlchemyTransactionManager
    - pool_pre_ping on: stale pooled connections are replaced before use

Design Decisions:
    - DatabaseSessionManager wraps an existing engine so tests can hand it the
      SQLite engine; init_db builds the pooled production engine
    - expire_on_commit=False: records are built from rows after commit
"""

import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from pr_reviewers.infrastructure.transaction import SqlAlchemyTransactionManager

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Owns the engine and the session factory shared by all transactions."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False,
        )

    def transaction_manager(self) -> SqlAlchemyTransactionManager:
        return SqlAlchemyTransactionManager(self._session_factory)

    async def health_check(self) -> bool:
        """True when the database answers SELECT 1."""
        try:
            async with self.engine.connect() as conn:
                result = await conn.scalar(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(f"DB health check failed: {e}")
            return False
        return result == 1

    async def dispose(self) -> None:
        await self.engine.dispose()


# Set by init_db on startup
db_manager: DatabaseSessionManager | None = None


def init_db(
    database_url: str,
    pool_size: int = 15,
    max_overflow: int = 5,
    pool_recycle: int = 600,
) -> None:
    global db_manager
    engine = create_async_engine(
        database_url,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=True,
        pool_recycle=pool_recycle,
    )
    db_manager = DatabaseSessionManager(engine)
    logger.info(f"Database engine created (pool_size={pool_size})")


def get_transaction_manager() -> SqlAlchemyTransactionManager:
    """FastAPI dependency: transaction scopes for the merge workflow."""
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    return db_manager.transaction_manager()
