"""Error Handlers — map exceptions escaping a route to the REST error envelope.

Invariants:
    - Every error body has the shape {"error": {"code", "message", "category", "severity", ...}}
    - PRReviewersError renders its own envelope (to_response) with its http_status
    - A body that cannot be decoded (bad JSON, wrong types, unparsable UUID)
      answers 400; a decoded body failing field validation (missing field)
      answers 422; both use code VALIDATION_ERROR with per-field details
    - Anything unhandled answers 500 UNKNOWN; exception text never reaches the client

Design Decisions:
    - 5xx logged at ERROR, 4xx at WARNING: client mistakes are not incidents
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pr_reviewers.core.errors import ErrorCategory, ErrorSeverity, PRReviewersError

logger = logging.getLogger(__name__)

# pydantic error types meaning the body could not be read as a merge request
DECODE_ERROR_TYPES = frozenset({
    "json_invalid", "json_type", "model_attributes_type", "dict_type",
    "uuid_parsing", "uuid_type", "string_type",
})


def _envelope(
    code: str, message: str, category: ErrorCategory, severity: ErrorSeverity, **extra,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **extra,
        },
    }


async def _handle_domain_error(request: Request, exc: PRReviewersError) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{request.method} {request.url.path} -> {exc.http_status}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "pull_request_id": exc.context.pull_request_id,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def _is_decode_failure(errors) -> bool:
    """True when no error is a field-level rule on an otherwise readable body."""
    return all(
        err["type"] in DECODE_ERROR_TYPES
        or (err["type"] == "missing" and tuple(err["loc"]) == ("body",))
        for err in errors
    )


async def _handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    errors = exc.errors()
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in errors
    ]
    if _is_decode_failure(errors):
        status_code, message = status.HTTP_400_BAD_REQUEST, "failed to decode request"
    else:
        status_code, message = status.HTTP_422_UNPROCESSABLE_ENTITY, "validation failed"
    logger.warning(
        f"Rejected request body on {request.url.path}: {len(details)} invalid field(s)",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status_code,
        content=_envelope(
            "VALIDATION_ERROR", message,
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, details=details,
        ),
    )


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        extra={"error_code": "UNKNOWN", "path": request.url.path},
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "UNKNOWN", "Internal server error",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the handlers, most specific first."""
    app.add_exception_handler(PRReviewersError, _handle_domain_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)
