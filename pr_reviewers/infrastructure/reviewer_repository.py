"""PR Reviewer Repository — SQLAlchemy implementation of ReviewerRepository.

Invariants:
    - No assignments is an empty list, never an error
"""

from sqlalchemy import select

from pr_reviewers.core.domain_types import (
    PullRequestId, ReviewerId, ReviewerRecord,
)
from pr_reviewers.infrastructure.transaction import SqlAlchemyTransaction
from pr_reviewers.models.pr_reviewer import PRReviewer


def _to_record(row: PRReviewer) -> ReviewerRecord:
    return ReviewerRecord(
        id=row.id,
        pr_id=PullRequestId(row.pr_id),
        reviewer_id=ReviewerId(row.reviewer_id),
    )


class SqlAlchemyReviewerRepository:

    async def save(
        self, tx: SqlAlchemyTransaction, record: ReviewerRecord,
    ) -> ReviewerRecord:
        row = PRReviewer(
            id=record.id, pr_id=record.pr_id, reviewer_id=record.reviewer_id,
        )
        tx.session.add(row)
        await tx.session.flush()
        return _to_record(row)

    async def get_by_pull_request_id(
        self, tx: SqlAlchemyTransaction, pr_id: PullRequestId,
    ) -> list[ReviewerRecord]:
        result = await tx.session.execute(
            select(PRReviewer).where(PRReviewer.pr_id == pr_id),
        )
        return [_to_record(row) for row in result.scalars().all()]
