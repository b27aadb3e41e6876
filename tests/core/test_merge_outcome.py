"""Merge Outcome — decision point, result assembly, failure taxonomy.

Tests:
    - is_merged compares against the terminal value (default MERGED)
    - build_merge_result collects reviewer ids into a set, keeps PR timestamps
    - Every MergeErrorKind has a category, a message, and a retryable flag
    - Only NOT_FOUND is non-retryable
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from pr_reviewers.core.domain_types import PullRequestRecord, ReviewerRecord
from pr_reviewers.core.errors import ErrorCategory
from pr_reviewers.core.merge_outcome import (
    AlreadyMerged, Merged, MergeErrorKind, MergeFailed,
    build_merge_result, describe_failure, is_merged,
)

CREATED = datetime(2026, 10, 1, tzinfo=timezone.utc)


def _pull_request(merged_at=None):
    return PullRequestRecord(
        id=uuid4(), name="Refactor parser", author_id=uuid4(),
        status_id=uuid4(), created_at=CREATED, merged_at=merged_at,
    )


def test_is_merged_only_for_terminal_value():
    assert is_merged("MERGED")
    assert not is_merged("OPEN")
    assert not is_merged("merged")
    assert is_merged("DONE", merged_value="DONE")


def test_build_result_collects_reviewer_ids_as_set():
    pr = _pull_request()
    r1, r2 = uuid4(), uuid4()
    reviewers = [
        ReviewerRecord(id=uuid4(), pr_id=pr.id, reviewer_id=r2),
        ReviewerRecord(id=uuid4(), pr_id=pr.id, reviewer_id=r1),
    ]

    result = build_merge_result(pr, "OPEN", reviewers)

    assert result.assigned_reviewers == frozenset({r1, r2})
    assert result.pull_request_id == pr.id
    assert result.status == "OPEN"
    assert result.created_at == CREATED
    assert result.merged_at is None


def test_build_result_with_no_reviewers_is_empty_not_none():
    result = build_merge_result(_pull_request(), "OPEN", [])
    assert result.assigned_reviewers == frozenset()


def test_outcome_variants_compare_by_value():
    result = build_merge_result(_pull_request(), "MERGED", [])
    assert Merged(result) == Merged(result)
    assert Merged(result) != AlreadyMerged(result)


@pytest.mark.parametrize("kind", list(MergeErrorKind))
def test_every_kind_is_described(kind):
    assert isinstance(kind.category, ErrorCategory)
    assert describe_failure(kind)
    assert describe_failure(kind, "pr_id 42").endswith(": pr_id 42")


def test_taxonomy_categories():
    assert MergeErrorKind.PULL_REQUEST_NOT_FOUND.category is ErrorCategory.RESOURCE_NOT_FOUND
    assert MergeErrorKind.GET_STATUS_FAILED.category is ErrorCategory.READ_FAILURE
    assert MergeErrorKind.UPDATE_MERGE_TIME_FAILED.category is ErrorCategory.WRITE_FAILURE
    assert MergeErrorKind.UNCLASSIFIED.category is ErrorCategory.INTERNAL


def test_only_not_found_is_non_retryable():
    non_retryable = {k for k in MergeErrorKind if not k.retryable}
    assert non_retryable == {MergeErrorKind.PULL_REQUEST_NOT_FOUND}


def test_failure_message():
    failure = MergeFailed(
        MergeErrorKind.GET_STATUS_FAILED,
        describe_failure(MergeErrorKind.GET_STATUS_FAILED, "status_id abc"),
    )
    assert failure.message == "failed to get pr status: status_id abc"


def test_result_assembly_is_deterministic():
    pr = _pull_request()
    reviewers = [ReviewerRecord(id=uuid4(), pr_id=pr.id, reviewer_id=uuid4())]

    assert build_merge_result(pr, "OPEN", reviewers) == build_merge_result(
        pr, "OPEN", list(reversed(reviewers)),
    )
