"""Structured Logging — JSON and text formatters for the calendar service.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Calendar fields (query, term, year, mode, source, records, error_code, path) are
      surfaced when present, in both formats
    - setup_logging is idempotent: a second call replaces the handler it installed

Design Decisions:
    - setup_logging called once on startup via lifespan
    - Text format appends calendar fields as key=value so development logs still show
      which term/year a message is about
"""

import logging
import json
from datetime import datetime, timezone

CALENDAR_FIELDS = (
    "query", "term", "year", "mode", "source", "records", "error_code", "path",
)


def calendar_fields(record: logging.LogRecord) -> dict:
    """Calendar-specific extras attached to a log record, in a stable order."""
    fields = {}
    for key in CALENDAR_FIELDS:
        val = record.__dict__.get(key)
        if val is not None:
            fields[key] = val
    return fields


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update(calendar_fields(record))
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable format with calendar fields appended as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = calendar_fields(record)
        if not fields:
            return line
        suffix = " ".join(f"{key}={val}" for key, val in fields.items())
        head, sep, tail = line.partition("\n")
        return f"{head} [{suffix}]{sep}{tail}"


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure root logging for the application."""
    for existing in list(logging.root.handlers):
        if getattr(existing, "_oxcal_handler", False):
            logging.root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler._oxcal_handler = True
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
