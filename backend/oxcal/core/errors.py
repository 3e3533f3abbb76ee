"""Error Hierarchy — typed, categorized exceptions for calendar failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - OutOfRange and DataUnavailable are the only raised failures; "not in term" and
      "unparsable text" are None results, never exceptions
    - to_response() produces the REST envelope used by api/error_handlers.py

Design Decisions:
    - Single hierarchy with CalendarError base: FastAPI global handler catches all
    - ErrorContext as dataclass: carries the failing query without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    OUT_OF_RANGE = "out_of_range"
    DATA_SOURCE = "data_source"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    query: str | None = None
    term: str | None = None
    year: int | None = None
    debug_info: dict[str, Any] | None = None


class CalendarError(Exception):
    """Base exception for all calendar errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "query": self.context.query,
                    "term": self.context.term,
                    "year": self.context.year,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class OutOfRangeError(CalendarError):
    """The queried date or term has no covering entry in the term database."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "OUT_OF_RANGE", ErrorCategory.OUT_OF_RANGE,
            ErrorSeverity.WARNING, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DataUnavailableError(CalendarError):
    """Term dataset is missing, unreadable or malformed."""
    def __init__(self, message: str, source: str, context: ErrorContext | None = None):
        super().__init__(
            f"Term data from {source} unavailable: {message}",
            "DATA_UNAVAILABLE", ErrorCategory.DATA_SOURCE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.source = source
