"""Domain Types — identity types, status values, and repository records.

Invariants:
    - PullRequestId, StatusId, ReviewerId, UserId wrap UUIDs — never use bare UUID in domain logic
    - Records are frozen: repositories hand out snapshots, never live ORM objects
    - merged_at is None until the pull request is merged

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Status values are an open set of strings; only MERGED is terminal,
      so PRStatus lists the known values without closing the column
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

PullRequestId = NewType("PullRequestId", UUID)
StatusId = NewType("StatusId", UUID)
ReviewerId = NewType("ReviewerId", UUID)
UserId = NewType("UserId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class PRStatus(str, Enum):
    """Known pull request status values — maps to pr_statuses.status."""
    OPEN = "OPEN"
    MERGED = "MERGED"


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class PullRequestRecord:
    id: PullRequestId
    name: str
    author_id: UserId
    status_id: StatusId
    created_at: datetime
    merged_at: datetime | None = None


@dataclass(frozen=True)
class StatusRecord:
    id: StatusId
    status: str


@dataclass(frozen=True)
class ReviewerRecord:
    """One reviewer assignment (pr_id, reviewer_id)."""
    id: UUID
    pr_id: PullRequestId
    reviewer_id: ReviewerId
