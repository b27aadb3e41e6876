"""PRReviewer ORM — one reviewer assigned to one pull request.

Invariants:
    - Always belongs to a PullRequest (pr_id FK)
    - (pr_id, reviewer_id) is unique
"""

import uuid

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from pr_reviewers.db.base import Base


class PRReviewer(Base):
    __tablename__ = "pr_reviewers"
    __table_args__ = (
        UniqueConstraint("pr_id", "reviewer_id", name="uq_pr_reviewers_pr_reviewer"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    pr_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("pull_requests.id"),
        nullable=False, index=True,
    )
    reviewer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False,
    )
