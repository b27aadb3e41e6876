"""Boundary Protocols — contracts between the merge workflow and persistence.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Every repository call takes the explicit Transaction scope as its first argument
    - Repositories return frozen records (core/domain_types.py), never ORM objects
    - Not-found is signalled with ResourceNotFoundError subclasses (core/errors.py)

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Transaction is an opaque handle here; each shell implementation knows
      what it wraps (an AsyncSession for the SQLAlchemy one)
    - Async in Protocol: implementations do IO
"""

from typing import AsyncContextManager, Protocol

from pr_reviewers.core.domain_types import (
    PullRequestId, StatusId,
    PullRequestRecord, StatusRecord, ReviewerRecord,
)


class Transaction(Protocol):
    """Opaque unit-of-work handle. Commit/rollback are bound to scope exit."""


class TransactionManager(Protocol):
    """Opens transaction scopes.

    transaction() commits when the block exits cleanly and rolls back when
    anything (cancellation included) escapes it.
    """
    def transaction(self) -> AsyncContextManager[Transaction]: ...


class PullRequestRepository(Protocol):
    """Contract for pull request persistence — implemented by shell."""
    async def save(
        self, tx: Transaction, record: PullRequestRecord,
    ) -> PullRequestRecord: ...

    async def get_by_id(
        self, tx: Transaction, pr_id: PullRequestId,
    ) -> PullRequestRecord:
        """Raises PullRequestNotFoundError when no row matches."""
        ...

    async def mark_merged_by_id(
        self, tx: Transaction, pr_id: PullRequestId,
    ) -> PullRequestRecord:
        """Set merged_at to now and return the updated record."""
        ...


class StatusRepository(Protocol):
    """Contract for PR status persistence — implemented by shell."""
    async def save(self, tx: Transaction, record: StatusRecord) -> StatusRecord: ...

    async def get_by_id(self, tx: Transaction, status_id: StatusId) -> StatusRecord:
        """Raises StatusNotFoundError when no row matches."""
        ...

    async def update_by_id(
        self,
        tx: Transaction,
        status_id: StatusId,
        value: str,
        expected: str | None = None,
    ) -> StatusRecord:
        """Set the status value.

        With `expected`, only a row still holding that value is updated;
        otherwise StatusConflictError is raised.
        """
        ...


class ReviewerRepository(Protocol):
    """Contract for reviewer assignment persistence — implemented by shell."""
    async def save(self, tx: Transaction, record: ReviewerRecord) -> ReviewerRecord: ...

    async def get_by_pull_request_id(
        self, tx: Transaction, pr_id: PullRequestId,
    ) -> list[ReviewerRecord]:
        """May return [] or raise ReviewersNotFoundError for no assignments."""
        ...
