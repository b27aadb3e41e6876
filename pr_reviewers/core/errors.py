"""Error Hierarchy — exceptions raised by repositories, transaction scopes and routes.

Invariants:
    - Each class fixes its code, category, severity and http_status as class
      attributes; instances only add a message and an ErrorContext
    - Not-found → 404, lost compare-and-swap → 409, database failure → 503
    - to_response() is the only REST rendering of an error

Design Decisions:
    - Repositories raise these; the merge workflow classifies them into
      MergeErrorKind (core/merge_outcome.py) and never lets them escape
    - MergeFailedError is the one class whose code/status vary per instance:
      they come from the MergeErrorKind it was built from
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    READ_FAILURE = "read_failure"
    WRITE_FAILURE = "write_failure"
    DATABASE = "database"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Identifiers of the entities involved in a failure."""
    pull_request_id: str | None = None
    status_id: str | None = None
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def as_dict(self) -> dict[str, str]:
        """Identifiers that are set; unset ones are omitted from responses."""
        ids = {"pull_request_id": self.pull_request_id, "status_id": self.status_id}
        return {k: v for k, v in ids.items() if v is not None}


class PRReviewersError(Exception):
    """Base of every error the service renders as a REST envelope."""

    code: str = "INTERNAL_ERROR"
    category: ErrorCategory = ErrorCategory.INTERNAL
    severity: ErrorSeverity = ErrorSeverity.ERROR
    http_status: int = 500

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.occurred_at.isoformat(),
                "context": self.context.as_dict(),
            }
        }


# ─── Lookups (404) ──────────────────────────────────────────────

class ResourceNotFoundError(PRReviewersError):
    code = "NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    http_status = 404

    def __init__(
        self, resource_type: str, resource_id: object, context: ErrorContext | None = None,
    ):
        super().__init__(f"{resource_type} '{resource_id}' not found", context)
        self.resource_type = resource_type
        self.resource_id = str(resource_id)


class PullRequestNotFoundError(ResourceNotFoundError):
    def __init__(self, pr_id: object, context: ErrorContext | None = None):
        super().__init__(
            "Pull request", pr_id, context or ErrorContext(pull_request_id=str(pr_id)),
        )


class StatusNotFoundError(ResourceNotFoundError):
    def __init__(self, status_id: object, context: ErrorContext | None = None):
        super().__init__(
            "PR status", status_id, context or ErrorContext(status_id=str(status_id)),
        )


class ReviewersNotFoundError(ResourceNotFoundError):
    """No reviewer assignments exist for a pull request.

    Not a failure for the merge workflow: it is normalized to an empty set.
    """
    def __init__(self, pr_id: object, context: ErrorContext | None = None):
        super().__init__(
            "PR reviewers", pr_id, context or ErrorContext(pull_request_id=str(pr_id)),
        )


# ─── Store failures ─────────────────────────────────────────────

class DatabaseError(PRReviewersError):
    code = "DATABASE_ERROR"
    category = ErrorCategory.DATABASE
    severity = ErrorSeverity.CRITICAL
    http_status = 503

    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(f"Database {operation} failed: {message}", context)
        self.operation = operation


class ConcurrencyError(PRReviewersError):
    code = "CONCURRENCY_CONFLICT"
    category = ErrorCategory.CONFLICT
    http_status = 409


class StatusConflictError(ConcurrencyError):
    """Compare-and-swap status update found a different stored value."""

    def __init__(
        self, status_id: object, expected: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"PR status '{status_id}' changed concurrently (expected {expected})",
            context or ErrorContext(status_id=str(status_id)),
        )
        self.status_id = status_id
        self.expected = expected


# ─── Workflow ───────────────────────────────────────────────────

class MergeFailedError(PRReviewersError):
    """A MergeFailed outcome raised by the HTTP route for the global handler."""

    def __init__(
        self,
        code: str,
        message: str,
        category: ErrorCategory,
        http_status: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(message, context)
        self.code = code
        self.category = category
        self.http_status = http_status
        self.severity = (
            ErrorSeverity.ERROR if http_status < 500 else ErrorSeverity.CRITICAL
        )
