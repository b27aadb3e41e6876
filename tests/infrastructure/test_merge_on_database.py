"""Merge Workflow on SQLite — the workflow wired to the real repositories.

Invariants:
    - OPEN PR with reviewers {R1, R2} merges; the status row reads MERGED afterwards
    - A second merge is AlreadyMerged with the same timestamps and status
    - Failing merged_at stamping after the status update leaves the status row OPEN
    - Missing pull request is PULL_REQUEST_NOT_FOUND
"""

from datetime import datetime, timezone
from uuid import uuid4

from pr_reviewers.core.merge_outcome import (
    AlreadyMerged, Merged, MergeErrorKind, MergeFailed,
)
from pr_reviewers.infrastructure.pull_request_repository import (
    SqlAlchemyPullRequestRepository,
)
from pr_reviewers.services.merge_pull_request import MergePullRequest

FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class _FailingMarkRepository(SqlAlchemyPullRequestRepository):
    async def mark_merged_by_id(self, tx, pr_id):
        raise RuntimeError("merged_at write failed")


def _workflow(pr_repo, status_repo, reviewer_repo, transactions):
    return MergePullRequest(pr_repo, status_repo, reviewer_repo, transactions)


async def _stored_status(transactions, status_repo, status_id) -> str:
    async with transactions.transaction() as tx:
        return (await status_repo.get_by_id(tx, status_id)).status


async def test_merge_scenario(
    transactions, pr_repo, status_repo, reviewer_repo, seed_pull_request,
):
    ids = await seed_pull_request(reviewers=2)
    workflow = _workflow(pr_repo, status_repo, reviewer_repo, transactions)

    outcome = await workflow.run(ids["pr_id"])

    assert isinstance(outcome, Merged)
    assert outcome.result.status == "MERGED"
    assert outcome.result.assigned_reviewers == frozenset(ids["reviewer_ids"])
    assert outcome.result.merged_at == FIXED_NOW
    assert await _stored_status(transactions, status_repo, ids["status_id"]) == "MERGED"


async def test_second_merge_is_already_merged(
    transactions, pr_repo, status_repo, reviewer_repo, seed_pull_request,
):
    ids = await seed_pull_request(reviewers=2)
    workflow = _workflow(pr_repo, status_repo, reviewer_repo, transactions)

    first = await workflow.run(ids["pr_id"])
    second = await workflow.run(ids["pr_id"])

    assert isinstance(second, AlreadyMerged)
    assert second.result == first.result


async def test_merge_time_failure_leaves_status_unchanged(
    transactions, status_repo, reviewer_repo, seed_pull_request,
):
    ids = await seed_pull_request()
    workflow = _workflow(
        _FailingMarkRepository(clock=lambda: FIXED_NOW),
        status_repo, reviewer_repo, transactions,
    )

    outcome = await workflow.run(ids["pr_id"])

    assert isinstance(outcome, MergeFailed)
    assert outcome.kind is MergeErrorKind.UPDATE_MERGE_TIME_FAILED
    assert await _stored_status(transactions, status_repo, ids["status_id"]) == "OPEN"


async def test_missing_pull_request(transactions, pr_repo, status_repo, reviewer_repo):
    workflow = _workflow(pr_repo, status_repo, reviewer_repo, transactions)

    outcome = await workflow.run(uuid4())

    assert isinstance(outcome, MergeFailed)
    assert outcome.kind is MergeErrorKind.PULL_REQUEST_NOT_FOUND
