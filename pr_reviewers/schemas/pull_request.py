"""Pull Request Schemas — merge request body and consolidated PR response.

Invariants:
    - pull_request_id must parse as a UUID (400 otherwise)
    - assigned_reviewers is always a list, empty when nobody is assigned
    - merged_at is null until the pull request is merged

Design Decisions:
    - Reviewers sorted by string form: the result set is unordered, the
      response should still be stable for clients and caches
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from pr_reviewers.core.merge_outcome import MergeResult


class MergePullRequestRequest(BaseModel):
    pull_request_id: UUID


class PullRequestResponse(BaseModel):
    """Public view of a pull request with its reviewers."""
    pull_request_id: UUID
    pull_request_name: str
    author_id: UUID
    status: str
    assigned_reviewers: list[UUID]
    created_at: datetime
    merged_at: datetime | None = None

    @classmethod
    def from_result(cls, result: MergeResult) -> "PullRequestResponse":
        return cls(
            pull_request_id=result.pull_request_id,
            pull_request_name=result.name,
            author_id=result.author_id,
            status=result.status,
            assigned_reviewers=sorted(result.assigned_reviewers, key=str),
            created_at=result.created_at,
            merged_at=result.merged_at,
        )


class MergePullRequestResponse(BaseModel):
    pr: PullRequestResponse
    already_merged: bool = False
