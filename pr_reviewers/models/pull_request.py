"""PullRequest ORM — persists a pull request and its merge timestamp.

Invariants:
    - id is UUID primary key
    - status_id references exactly one pr_statuses row
    - merged_at is NULL until the pull request is merged

Design Decisions:
    - author_id is a bare UUID: user management lives upstream of this service
    - Status in its own table (not a column): mirrors the upstream schema, and the
      merge workflow must update both rows in one transaction
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from pr_reviewers.db.base import Base


class PullRequest(Base):
    """Pull request entity."""
    __tablename__ = "pull_requests"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    author_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False,
    )
    status_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("pr_statuses.id"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    merged_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
