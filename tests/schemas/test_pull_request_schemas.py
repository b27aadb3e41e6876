"""Pull Request Schemas — request validation and response shaping."""

from datetime import datetime, timezone
from uuid import UUID, uuid4

import pytest
from pydantic import ValidationError

from pr_reviewers.core.merge_outcome import MergeResult
from pr_reviewers.schemas.pull_request import (
    MergePullRequestRequest, MergePullRequestResponse, PullRequestResponse,
)


def test_request_requires_uuid():
    with pytest.raises(ValidationError):
        MergePullRequestRequest(pull_request_id="nope")


def test_request_parses_uuid_string():
    pr_id = uuid4()
    assert MergePullRequestRequest(pull_request_id=str(pr_id)).pull_request_id == pr_id


def test_response_sorts_reviewers_and_keeps_null_merge_time():
    reviewers = frozenset({
        UUID("ffffffff-0000-0000-0000-000000000000"),
        UUID("00000000-0000-0000-0000-00000000000a"),
    })
    result = MergeResult(
        pull_request_id=uuid4(), name="pr", author_id=uuid4(), status="OPEN",
        assigned_reviewers=reviewers,
        created_at=datetime(2026, 10, 1, tzinfo=timezone.utc), merged_at=None,
    )

    body = MergePullRequestResponse(
        pr=PullRequestResponse.from_result(result),
    ).model_dump(mode="json")

    assert body["already_merged"] is False
    assert body["pr"]["merged_at"] is None
    assert body["pr"]["assigned_reviewers"] == [
        "00000000-0000-0000-0000-00000000000a",
        "ffffffff-0000-0000-0000-000000000000",
    ]
    assert body["pr"]["pull_request_name"] == "pr"
