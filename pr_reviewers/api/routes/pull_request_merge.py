"""Pull Request Merge — HTTP entry point for the merge workflow.

Invariants:
    - Merged and AlreadyMerged both answer 200 with the current PR state
    - MergeFailed is raised as MergeFailedError and rendered by the global handler
    - KIND_HTTP_STATUS covers every MergeErrorKind (enforced by tests)

Design Decisions:
    - Workflow built per request through a dependency: tests override
      get_merge_workflow with fakes, production wires SQLAlchemy repositories
"""

import logging

from fastapi import APIRouter, Depends, status

from pr_reviewers.config import get_settings
from pr_reviewers.core.domain_types import PullRequestId
from pr_reviewers.core.errors import ErrorContext, MergeFailedError
from pr_reviewers.core.merge_outcome import (
    AlreadyMerged, Merged, MergeErrorKind, MergeFailed,
)
from pr_reviewers.infrastructure.database import get_transaction_manager
from pr_reviewers.infrastructure.pull_request_repository import (
    SqlAlchemyPullRequestRepository,
)
from pr_reviewers.infrastructure.reviewer_repository import (
    SqlAlchemyReviewerRepository,
)
from pr_reviewers.infrastructure.status_repository import SqlAlchemyStatusRepository
from pr_reviewers.infrastructure.transaction import SqlAlchemyTransactionManager
from pr_reviewers.schemas.pull_request import (
    MergePullRequestRequest, MergePullRequestResponse, PullRequestResponse,
)
from pr_reviewers.services.merge_pull_request import MergePullRequest

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/pullRequest", tags=["pull_requests"])

KIND_HTTP_STATUS: dict[MergeErrorKind, int] = {
    MergeErrorKind.PULL_REQUEST_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    MergeErrorKind.GET_PULL_REQUEST_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    MergeErrorKind.GET_STATUS_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    MergeErrorKind.GET_REVIEWERS_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    MergeErrorKind.UPDATE_STATUS_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    MergeErrorKind.UPDATE_MERGE_TIME_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    MergeErrorKind.UNCLASSIFIED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_merge_workflow(
    transactions: SqlAlchemyTransactionManager = Depends(get_transaction_manager),
) -> MergePullRequest:
    return MergePullRequest(
        SqlAlchemyPullRequestRepository(),
        SqlAlchemyStatusRepository(),
        SqlAlchemyReviewerRepository(),
        transactions,
        merged_status=get_settings().merged_status_value,
    )


def to_merge_failed_error(failure: MergeFailed, pr_id: PullRequestId) -> MergeFailedError:
    """Map a classified failure to the REST error it is rendered as."""
    kind = failure.kind
    code = "NOT_FOUND" if kind is MergeErrorKind.PULL_REQUEST_NOT_FOUND else kind.value
    return MergeFailedError(
        code, failure.message, kind.category, KIND_HTTP_STATUS[kind],
        ErrorContext(pull_request_id=str(pr_id)),
    )


@router.post("/merge", response_model=MergePullRequestResponse)
async def merge_pull_request(
    body: MergePullRequestRequest,
    workflow: MergePullRequest = Depends(get_merge_workflow),
):
    """Merge a pull request. Merging an already merged PR is a no-op success."""
    pr_id = PullRequestId(body.pull_request_id)
    outcome = await workflow.run(pr_id)

    match outcome:
        case Merged(result=result):
            return MergePullRequestResponse(pr=PullRequestResponse.from_result(result))
        case AlreadyMerged(result=result):
            return MergePullRequestResponse(
                pr=PullRequestResponse.from_result(result), already_merged=True,
            )
        case MergeFailed():
            raise to_merge_failed_error(outcome, pr_id)
