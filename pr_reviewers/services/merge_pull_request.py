"""Merge Pull Request — transactional OPEN → MERGED transition.

Invariants:
    - All reads and writes of one invocation happen inside ONE transaction scope
    - Already-MERGED pull requests are never mutated: AlreadyMerged(current state)
    - Status update and merged_at stamp commit together or not at all
    - Reviewers not found == no reviewers (empty set), never a failure
    - Every repository failure is classified into a MergeErrorKind with the failing id
    - asyncio.CancelledError is never classified: it rolls back and propagates
    - No internal retries

Design Decisions:
    - Steps raise _StepFailed inside the scope so the transaction manager rolls
      back; the classification is turned into MergeFailed only after the scope exits
    - Status update is a compare-and-swap on the value read in step 2: a concurrent
      writer that slipped past the row lock surfaces as UPDATE_STATUS_FAILED
"""

import logging
from typing import Awaitable, TypeVar

from pr_reviewers.core.domain_types import (
    PRStatus, PullRequestId, PullRequestRecord, ReviewerRecord,
)
from pr_reviewers.core.errors import PullRequestNotFoundError, ReviewersNotFoundError
from pr_reviewers.core.merge_outcome import (
    AlreadyMerged, Merged, MergeErrorKind, MergeFailed, MergeOutcome,
    build_merge_result, describe_failure, is_merged,
)
from pr_reviewers.core.repository_protocols import (
    PullRequestRepository, ReviewerRepository, StatusRepository,
    Transaction, TransactionManager,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _StepFailed(Exception):
    """A classified step failure; aborts the transaction scope."""

    def __init__(self, kind: MergeErrorKind, detail: str):
        super().__init__(describe_failure(kind, detail))
        self.kind = kind
        self.detail = detail


class MergePullRequest:
    """Merge workflow — one instance is safe to reuse across invocations."""

    def __init__(
        self,
        pull_requests: PullRequestRepository,
        statuses: StatusRepository,
        reviewers: ReviewerRepository,
        transactions: TransactionManager,
        merged_status: str = PRStatus.MERGED.value,
    ):
        self._pull_requests = pull_requests
        self._statuses = statuses
        self._reviewers = reviewers
        self._transactions = transactions
        self._merged_status = merged_status

    async def run(self, pr_id: PullRequestId) -> MergeOutcome:
        try:
            async with self._transactions.transaction() as tx:
                outcome = await self._merge(tx, pr_id)
        except _StepFailed as e:
            return self._failed(e.kind, e.detail, pr_id, e.__cause__)
        except Exception as e:
            return self._failed(
                MergeErrorKind.UNCLASSIFIED, f"pr_id {pr_id}", pr_id, e,
            )

        logger.info(
            f"Merge finished: {type(outcome).__name__}",
            extra={"pull_request_id": pr_id, "outcome": type(outcome).__name__},
        )
        return outcome

    async def _merge(self, tx: Transaction, pr_id: PullRequestId) -> MergeOutcome:
        logger.debug("Get pull request", extra={"pull_request_id": pr_id})
        pull_request = await self._get_pull_request(tx, pr_id)

        status = await self._step(
            self._statuses.get_by_id(tx, pull_request.status_id),
            MergeErrorKind.GET_STATUS_FAILED,
            f"status_id {pull_request.status_id}",
        )

        logger.debug("Get assigned reviewers", extra={"pull_request_id": pr_id})
        reviewers = await self._get_reviewers(tx, pull_request)

        if is_merged(status.status, self._merged_status):
            logger.debug(
                "PR already merged, returning current state",
                extra={"pull_request_id": pr_id},
            )
            return AlreadyMerged(
                build_merge_result(pull_request, status.status, reviewers),
            )

        logger.debug(
            f"Update PR status {status.status} -> {self._merged_status}",
            extra={"pull_request_id": pr_id, "status_id": status.id},
        )
        new_status = await self._step(
            self._statuses.update_by_id(
                tx, status.id, self._merged_status, expected=status.status,
            ),
            MergeErrorKind.UPDATE_STATUS_FAILED,
            str(pr_id),
        )
        merged_pr = await self._step(
            self._pull_requests.mark_merged_by_id(tx, pull_request.id),
            MergeErrorKind.UPDATE_MERGE_TIME_FAILED,
            str(pr_id),
        )
        return Merged(build_merge_result(merged_pr, new_status.status, reviewers))

    async def _get_pull_request(
        self, tx: Transaction, pr_id: PullRequestId,
    ) -> PullRequestRecord:
        try:
            return await self._pull_requests.get_by_id(tx, pr_id)
        except PullRequestNotFoundError as e:
            raise _StepFailed(MergeErrorKind.PULL_REQUEST_NOT_FOUND, str(pr_id)) from e
        except Exception as e:
            raise _StepFailed(MergeErrorKind.GET_PULL_REQUEST_FAILED, str(pr_id)) from e

    async def _get_reviewers(
        self, tx: Transaction, pull_request: PullRequestRecord,
    ) -> list[ReviewerRecord]:
        try:
            reviewers = await self._reviewers.get_by_pull_request_id(
                tx, pull_request.id,
            )
        except ReviewersNotFoundError:
            logger.info(
                "Reviewer store reported no assignments",
                extra={"pull_request_id": pull_request.id},
            )
            return []
        except Exception as e:
            raise _StepFailed(
                MergeErrorKind.GET_REVIEWERS_FAILED, f"pr_id {pull_request.id}",
            ) from e
        return reviewers or []

    @staticmethod
    async def _step(call: Awaitable[T], kind: MergeErrorKind, detail: str) -> T:
        try:
            return await call
        except Exception as e:
            raise _StepFailed(kind, detail) from e

    @staticmethod
    def _failed(
        kind: MergeErrorKind,
        detail: str,
        pr_id: PullRequestId,
        cause: BaseException | None,
    ) -> MergeFailed:
        message = describe_failure(kind, detail)
        not_found = kind is MergeErrorKind.PULL_REQUEST_NOT_FOUND
        log = logger.warning if not_found else logger.error
        log(
            f"Merge failed: {message}",
            extra={"pull_request_id": pr_id, "error_code": kind.value},
            exc_info=None if not_found else cause,
        )
        return MergeFailed(kind=kind, message=message)
