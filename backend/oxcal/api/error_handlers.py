"""Error Handlers — map calendar failures and bad queries to JSON envelopes.

Invariants:
    - OutOfRangeError → 404 logged as a warning with the failing date/term/year
    - DataUnavailableError → 503 logged as an error with the dataset source
    - RequestValidationError → 400; each detail names where the bad value came from
      (query or body), the parameter, and for enum parameters the accepted values
    - Any other exception → 500 without internal details

Design Decisions:
    - Log extras come from ErrorContext so the JSON log line and the response agree
    - Enum choices are read from pydantic's error context rather than listed here
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from oxcal.core.errors import (
    CalendarError,
    DataUnavailableError,
    ErrorCategory,
    ErrorSeverity,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CalendarError, calendar_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


def calendar_log_extra(request: Request, exc: CalendarError) -> dict:
    """Log extras for a calendar failure: code, path and whatever the context knows."""
    extra = {
        "error_code": exc.code,
        "path": request.url.path,
        "query": exc.context.query,
        "term": exc.context.term,
        "year": exc.context.year,
    }
    if isinstance(exc, DataUnavailableError):
        extra["source"] = exc.source
    return extra


async def calendar_error_handler(request: Request, exc: CalendarError):
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(exc.message, extra=calendar_log_extra(request, exc))
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [_describe_validation_error(e) for e in exc.errors()]
    logger.warning(
        f"Rejected request: {', '.join(d['parameter'] for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid calendar query",
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.WARNING.value,
                "details": details,
            },
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception: {exc}",
        exc_info=True,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )


def _describe_validation_error(error: dict) -> dict:
    """One detail entry: {"location", "parameter", "message"[, "allowed"]}."""
    loc = [str(part) for part in error.get("loc", ())]
    location = loc[0] if loc and loc[0] in ("query", "body", "path") else None
    parameter = ".".join(loc[1:] if location else loc) or "<request>"
    detail = {
        "location": location,
        "parameter": parameter,
        "message": error.get("msg", "invalid value"),
    }
    expected = (error.get("ctx") or {}).get("expected")
    if error.get("type") == "enum" and expected:
        detail["allowed"] = expected
    return detail
