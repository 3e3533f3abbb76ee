"""Root conftest — shared test configuration and term database fixtures."""

import os
from datetime import date

import pytest

# Ensure tests never pick up a system-wide dataset
os.environ.setdefault("SYSTEM_CALENDAR_PATH", "/nonexistent/oxford-calendar.yaml")
os.environ.setdefault("LOG_FORMAT", "text")

from oxcal.core.domain_types import Term, TermKey, TermRecord  # noqa: E402
from oxcal.core.term_database import TermDatabase  # noqa: E402
from oxcal.infrastructure.calendar_source import load_term_database  # noqa: E402


@pytest.fixture(scope="session")
def builtin_db() -> TermDatabase:
    """The dataset shipped with the package."""
    return load_term_database()


@pytest.fixture
def small_db() -> TermDatabase:
    """Trinity 2007 to Hilary 2008, with Hilary 2008 provisional."""
    return TermDatabase([
        TermRecord(TermKey(Term.TRINITY, 2007), date(2007, 4, 22)),
        TermRecord(TermKey(Term.MICHAELMAS, 2007), date(2007, 10, 7)),
        TermRecord(TermKey(Term.HILARY, 2008), date(2008, 1, 13), provisional=True),
    ])
