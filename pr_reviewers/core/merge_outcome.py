"""Merge Outcome — tagged result of the merge workflow plus its pure decision helpers.

Invariants:
    - MergeOutcome is closed: Merged | AlreadyMerged | MergeFailed
    - Merged and AlreadyMerged always carry a MergeResult; MergeFailed never does
    - MergeErrorKind is closed; every kind has a taxonomy category and a retryable flag
    - assigned_reviewers is a frozenset (order irrelevant, never None)
    - Pure functions only — no IO, no async

Design Decisions:
    - Tagged union over error+result dual channel: AlreadyMerged is an outcome,
      not an exception, so callers consume the result without special-casing an error
    - str Enum for kinds: serializes into the REST envelope as the error code
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, Union
from uuid import UUID

from pr_reviewers.core.domain_types import (
    PRStatus, PullRequestRecord, ReviewerRecord,
)
from pr_reviewers.core.errors import ErrorCategory


class MergeErrorKind(str, Enum):
    """Every way the merge workflow can fail."""
    PULL_REQUEST_NOT_FOUND = "PULL_REQUEST_NOT_FOUND"
    GET_PULL_REQUEST_FAILED = "GET_PULL_REQUEST_FAILED"
    GET_STATUS_FAILED = "GET_STATUS_FAILED"
    GET_REVIEWERS_FAILED = "GET_REVIEWERS_FAILED"
    UPDATE_STATUS_FAILED = "UPDATE_STATUS_FAILED"
    UPDATE_MERGE_TIME_FAILED = "UPDATE_MERGE_TIME_FAILED"
    UNCLASSIFIED = "UNCLASSIFIED"

    @property
    def category(self) -> ErrorCategory:
        return _KIND_CATEGORIES[self]

    @property
    def retryable(self) -> bool:
        """Whether a caller may retry. The workflow itself never retries."""
        return self is not MergeErrorKind.PULL_REQUEST_NOT_FOUND


_KIND_CATEGORIES: dict[MergeErrorKind, ErrorCategory] = {
    MergeErrorKind.PULL_REQUEST_NOT_FOUND: ErrorCategory.RESOURCE_NOT_FOUND,
    MergeErrorKind.GET_PULL_REQUEST_FAILED: ErrorCategory.READ_FAILURE,
    MergeErrorKind.GET_STATUS_FAILED: ErrorCategory.READ_FAILURE,
    MergeErrorKind.GET_REVIEWERS_FAILED: ErrorCategory.READ_FAILURE,
    MergeErrorKind.UPDATE_STATUS_FAILED: ErrorCategory.WRITE_FAILURE,
    MergeErrorKind.UPDATE_MERGE_TIME_FAILED: ErrorCategory.WRITE_FAILURE,
    MergeErrorKind.UNCLASSIFIED: ErrorCategory.INTERNAL,
}

_KIND_MESSAGES: dict[MergeErrorKind, str] = {
    MergeErrorKind.PULL_REQUEST_NOT_FOUND: "not found such pull request",
    MergeErrorKind.GET_PULL_REQUEST_FAILED: "failed to get pull request",
    MergeErrorKind.GET_STATUS_FAILED: "failed to get pr status",
    MergeErrorKind.GET_REVIEWERS_FAILED: "failed to get assigned reviewers",
    MergeErrorKind.UPDATE_STATUS_FAILED: "failed to update pr status",
    MergeErrorKind.UPDATE_MERGE_TIME_FAILED: "failed to update pr merge time",
    MergeErrorKind.UNCLASSIFIED: "failed to merge pull request",
}


@dataclass(frozen=True)
class MergeResult:
    """Consolidated view of a pull request after (or instead of) a merge."""
    pull_request_id: UUID
    name: str
    author_id: UUID
    status: str
    assigned_reviewers: frozenset[UUID]
    created_at: datetime
    merged_at: datetime | None


@dataclass(frozen=True)
class Merged:
    """The OPEN → MERGED transition happened in this call."""
    result: MergeResult


@dataclass(frozen=True)
class AlreadyMerged:
    """The pull request was already terminal; result is its current state."""
    result: MergeResult


@dataclass(frozen=True)
class MergeFailed:
    kind: MergeErrorKind
    message: str


MergeOutcome = Union[Merged, AlreadyMerged, MergeFailed]


def is_merged(status_value: str, merged_value: str = PRStatus.MERGED.value) -> bool:
    """Decision point: True when the status is already terminal."""
    return status_value == merged_value


def build_merge_result(
    pull_request: PullRequestRecord,
    status_value: str,
    reviewers: Iterable[ReviewerRecord],
) -> MergeResult:
    return MergeResult(
        pull_request_id=pull_request.id,
        name=pull_request.name,
        author_id=pull_request.author_id,
        status=status_value,
        assigned_reviewers=frozenset(r.reviewer_id for r in reviewers),
        created_at=pull_request.created_at,
        merged_at=pull_request.merged_at,
    )


def describe_failure(kind: MergeErrorKind, detail: str | None = None) -> str:
    """Human message for a failure kind, suffixed with the failing identifier."""
    base = _KIND_MESSAGES[kind]
    return f"{base}: {detail}" if detail else base
