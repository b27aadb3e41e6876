"""Transaction Scope — explicit unit-of-work handle over one AsyncSession.

Invariants:
    - One AsyncSession per scope; the session is closed on every exit path
    - Clean exit commits; ANY escaping exception (CancelledError included) rolls back
    - SQLAlchemy failures are mapped to DatabaseError: operation "transaction"
      when raised inside the scope body, "commit" when raised by the commit
    - A failing rollback is logged and never replaces the exception that caused it

Design Decisions:
    - Scope object passed explicitly to repositories instead of ambient context:
      a repository call outside a scope is a type error, not a silent autocommit
    - BaseException on rollback path: cancellation must never leave half a merge
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pr_reviewers.core.errors import DatabaseError

logger = logging.getLogger(__name__)


class SqlAlchemyTransaction:
    """Transaction handle given to repositories."""

    def __init__(self, session: AsyncSession):
        self.session = session


async def _rollback(session: AsyncSession) -> None:
    try:
        await session.rollback()
    except SQLAlchemyError as e:
        logger.error(f"Rollback failed: {e}")


class SqlAlchemyTransactionManager:
    """Opens SqlAlchemyTransaction scopes from a session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[SqlAlchemyTransaction]:
        session = self._session_factory()
        try:
            try:
                yield SqlAlchemyTransaction(session)
            except SQLAlchemyError as e:
                await _rollback(session)
                logger.error(f"Statement failed inside transaction: {e}")
                raise DatabaseError("Statement failed", "transaction") from e
            except BaseException:
                await _rollback(session)
                raise

            try:
                await session.commit()
            except SQLAlchemyError as e:
                await _rollback(session)
                logger.error(f"Commit failed: {e}")
                raise DatabaseError("Transaction failed", "commit") from e
        finally:
            await session.close()
