"""Calendar Source — loads the term dataset from YAML, once per process.

Invariants:
    - get() reads the source at most once; concurrent first calls block on a lock and
      all observe the same fully-built TermDatabase
    - reload() builds a complete replacement before swapping it in (readers never see
      a partially-populated database)
    - Any I/O, YAML or record error surfaces as DataUnavailableError

Design Decisions:
    - threading.Lock with double-checked read: the common path after load takes no lock
    - Source resolution order: explicit calendar_path, then the system-wide file if
      readable, then the dataset shipped with the package
"""

import logging
import os
import threading
from importlib import resources
from pathlib import Path

import yaml
from fastapi import Request

from oxcal.core.errors import DataUnavailableError
from oxcal.core.term_database import TermDatabase, parse_calendar_data

logger = logging.getLogger(__name__)

BUILTIN_SOURCE = "builtin:oxford-calendar.yaml"


def resolve_calendar_path(
    calendar_path: str | None, system_calendar_path: str | None = None,
) -> str:
    """Decide which dataset to read; returns a filesystem path or BUILTIN_SOURCE."""
    if calendar_path:
        return calendar_path
    if system_calendar_path and os.access(system_calendar_path, os.R_OK):
        return system_calendar_path
    return BUILTIN_SOURCE


def _read_text(source: str) -> str:
    if source == BUILTIN_SOURCE:
        return (
            resources.files("oxcal.data")
            .joinpath("oxford-calendar.yaml")
            .read_text(encoding="utf-8")
        )
    return Path(source).read_text(encoding="utf-8")


def load_term_database(source: str = BUILTIN_SOURCE) -> TermDatabase:
    """Read and validate a dataset. Raises DataUnavailableError."""
    try:
        raw = yaml.safe_load(_read_text(source))
    except OSError as e:
        raise DataUnavailableError(f"cannot read file ({e.strerror or e})", source) from e
    except yaml.YAMLError as e:
        raise DataUnavailableError(f"invalid YAML ({e})", source) from e

    db = parse_calendar_data(raw, source)
    logger.info(
        f"Loaded {len(db)} term records",
        extra={"source": source, "records": len(db)},
    )
    return db


class CalendarSource:
    """Owns the loaded TermDatabase for one dataset location."""

    def __init__(self, source: str = BUILTIN_SOURCE):
        self.source = source
        self._lock = threading.Lock()
        self._db: TermDatabase | None = None

    @property
    def loaded(self) -> bool:
        return self._db is not None

    def get(self) -> TermDatabase:
        db = self._db
        if db is not None:
            return db
        with self._lock:
            if self._db is None:
                self._db = load_term_database(self.source)
            return self._db

    def reload(self) -> TermDatabase:
        """Re-read the source and replace the whole database."""
        with self._lock:
            db = load_term_database(self.source)
            self._db = db
            return db


def get_term_database(request: Request) -> TermDatabase:
    """FastAPI dependency: the database owned by the app's CalendarSource."""
    return request.app.state.calendar_source.get()
