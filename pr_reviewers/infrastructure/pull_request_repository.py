"""Pull Request Repository — SQLAlchemy implementation of PullRequestRepository.

Invariants:
    - get_by_id locks the row (SELECT ... FOR UPDATE) for the rest of the scope
    - mark_merged_by_id stamps merged_at from the injected clock
    - Missing rows raise PullRequestNotFoundError

Design Decisions:
    - Clock injected (defaults to UTC now): tests pin merge timestamps
    - Row lock is a no-op on SQLite; PostgreSQL serializes concurrent merges on it
"""

import logging
from datetime import datetime
from typing import Callable

from sqlalchemy import select

from pr_reviewers.core.domain_types import (
    PullRequestId, StatusId, UserId, PullRequestRecord,
)
from pr_reviewers.core.errors import PullRequestNotFoundError
from pr_reviewers.infrastructure._records import as_utc, utcnow
from pr_reviewers.infrastructure.transaction import SqlAlchemyTransaction
from pr_reviewers.models.pull_request import PullRequest

logger = logging.getLogger(__name__)


def _to_record(row: PullRequest) -> PullRequestRecord:
    return PullRequestRecord(
        id=PullRequestId(row.id),
        name=row.name,
        author_id=UserId(row.author_id),
        status_id=StatusId(row.status_id),
        created_at=as_utc(row.created_at),
        merged_at=as_utc(row.merged_at),
    )


class SqlAlchemyPullRequestRepository:

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self._clock = clock

    async def save(
        self, tx: SqlAlchemyTransaction, record: PullRequestRecord,
    ) -> PullRequestRecord:
        row = PullRequest(
            id=record.id,
            name=record.name,
            author_id=record.author_id,
            status_id=record.status_id,
            created_at=record.created_at,
            merged_at=record.merged_at,
        )
        tx.session.add(row)
        await tx.session.flush()
        logger.debug("Pull request saved", extra={"pull_request_id": row.id})
        return _to_record(row)

    async def get_by_id(
        self, tx: SqlAlchemyTransaction, pr_id: PullRequestId,
    ) -> PullRequestRecord:
        return _to_record(await self._locked_row(tx, pr_id))

    async def mark_merged_by_id(
        self, tx: SqlAlchemyTransaction, pr_id: PullRequestId,
    ) -> PullRequestRecord:
        row = await self._locked_row(tx, pr_id)
        row.merged_at = self._clock()
        await tx.session.flush()
        logger.debug("Pull request marked merged", extra={"pull_request_id": pr_id})
        return _to_record(row)

    async def _locked_row(
        self, tx: SqlAlchemyTransaction, pr_id: PullRequestId,
    ) -> PullRequest:
        result = await tx.session.execute(
            select(PullRequest).where(PullRequest.id == pr_id).with_for_update(),
        )
        row = result.scalar_one_or_none()
        if row is None:
            raise PullRequestNotFoundError(pr_id)
        return row
