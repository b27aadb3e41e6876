"""PR Status Repository — SQLAlchemy implementation of StatusRepository.

Invariants:
    - get_by_id locks the row (SELECT ... FOR UPDATE)
    - update_by_id with `expected` is a compare-and-swap: a single conditional
      UPDATE; zero affected rows on an existing status → StatusConflictError
"""

import logging

from sqlalchemy import select, update

from pr_reviewers.core.domain_types import StatusId, StatusRecord
from pr_reviewers.core.errors import StatusConflictError, StatusNotFoundError
from pr_reviewers.infrastructure.transaction import SqlAlchemyTransaction
from pr_reviewers.models.pr_status import PRStatus

logger = logging.getLogger(__name__)


class SqlAlchemyStatusRepository:

    async def save(
        self, tx: SqlAlchemyTransaction, record: StatusRecord,
    ) -> StatusRecord:
        row = PRStatus(id=record.id, status=record.status)
        tx.session.add(row)
        await tx.session.flush()
        return StatusRecord(id=StatusId(row.id), status=row.status)

    async def get_by_id(
        self, tx: SqlAlchemyTransaction, status_id: StatusId,
    ) -> StatusRecord:
        result = await tx.session.execute(
            select(PRStatus).where(PRStatus.id == status_id).with_for_update(),
        )
        row = result.scalar_one_or_none()
        if row is None:
            raise StatusNotFoundError(status_id)
        return StatusRecord(id=StatusId(row.id), status=row.status)

    async def update_by_id(
        self,
        tx: SqlAlchemyTransaction,
        status_id: StatusId,
        value: str,
        expected: str | None = None,
    ) -> StatusRecord:
        stmt = update(PRStatus).where(PRStatus.id == status_id)
        if expected is not None:
            stmt = stmt.where(PRStatus.status == expected)
        result = await tx.session.execute(stmt.values(status=value))

        if result.rowcount == 0:
            if expected is not None and await self._exists(tx, status_id):
                raise StatusConflictError(status_id, expected)
            raise StatusNotFoundError(status_id)

        logger.debug(
            f"PR status set to {value}", extra={"status_id": status_id},
        )
        return StatusRecord(id=status_id, status=value)

    async def _exists(self, tx: SqlAlchemyTransaction, status_id: StatusId) -> bool:
        result = await tx.session.execute(
            select(PRStatus.id).where(PRStatus.id == status_id),
        )
        return result.scalar_one_or_none() is not None
