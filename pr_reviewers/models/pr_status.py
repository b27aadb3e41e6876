"""PRStatus ORM — persists the review status a pull request points at.

Invariants:
    - id is UUID primary key
    - status is an open set of strings; "MERGED" is terminal
"""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from pr_reviewers.db.base import Base


class PRStatus(Base):
    __tablename__ = "pr_statuses"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default="OPEN",
    )
