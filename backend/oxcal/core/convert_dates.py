"""Date Conversion — civil dates to Oxford academic dates and back.

Invariants:
    - to_academic returns None for "not in term" outcomes; it raises OutOfRangeError only
      when the term database does not cover the date
    - In-term week numbering: Sunday of 1st week starts week 1; a date d days before it
      (d > 0) is week floor(-d/7), so the statutory days before full term are -1st week
    - full_term mode returns only weeks 1-8; ext_term returns any date inside statutory term;
      nearest also fills vacations from the closest full term
    - confirmed=True never returns a date in a provisional term
    - from_academic accepts any integer week (including <= 0) and mirrors to_academic

Design Decisions:
    - Term database passed explicitly: no module-level cache, callers own the handle
    - Nearest fallback ties go to the previous term; the next-term branch rounds toward
      the boundary. Both asymmetries are part of the published behaviour
"""

import logging
import math
from datetime import date, timedelta

from oxcal.core.domain_types import (
    ONE_WEEK,
    AcademicDate,
    ConversionMode,
    FullTermWindow,
    Term,
    Weekday,
)
from oxcal.core.errors import ErrorContext, OutOfRangeError
from oxcal.core.resolve_terms import this_term
from oxcal.core.term_database import TermDatabase

logger = logging.getLogger(__name__)

FULL_TERM_WEEKS = range(1, 9)


def week_of_term(day: date, full_term_start: date) -> int:
    """Week number of `day` relative to the Sunday of 1st week.

    Days on or after the start count up from 1st week; earlier days are floored
    without the +1, so the seven days before the start fall in -1st week.
    """
    days = (day - full_term_start).days
    return days // 7 + (0 if days < 0 else 1)


def to_academic(
    db: TermDatabase,
    day: date,
    mode: ConversionMode = ConversionMode.NEAREST,
    confirmed: bool = False,
) -> AcademicDate | None:
    """Convert a civil date to an academic date, or None if `mode` excludes it."""
    weekday = Weekday.of(day)
    key = this_term(day)

    if key is not None:
        record = db.lookup(key.term, key.year)
        if record is None:
            raise OutOfRangeError(
                f"No full-term data for {key}",
                ErrorContext(query=day.isoformat(), term=key.term.value, year=key.year),
            )
        if confirmed and record.provisional:
            return None
        week = week_of_term(day, record.full_term_start)
        if mode is ConversionMode.FULL_TERM and week not in FULL_TERM_WEEKS:
            return None
        return AcademicDate(weekday, week, key.term, key.year)

    if mode is not ConversionMode.NEAREST:
        return None

    window, week = _nearest_term(db, day)
    if confirmed and window.provisional:
        return None
    return AcademicDate(weekday, week, window.key.term, window.key.year)


def _nearest_term(db: TermDatabase, day: date) -> tuple[FullTermWindow, int]:
    """Pick the full term closest to a vacation date and count weeks from it."""
    windows = db.windows()
    previous: FullTermWindow | None = None
    following: FullTermWindow | None = None

    for window in windows:
        if window.contains(day):
            # Early Easter can leave part of a full term outside statutory term
            return window, week_of_term(day, window.start)
        if day < window.start:
            following = window
            break
        previous = window

    if previous is None or following is None:
        raise OutOfRangeError(
            f"{day.isoformat()} is outside the range of known terms",
            ErrorContext(
                query=day.isoformat(),
                debug_info={
                    "first_start": db.first_start.isoformat() if db.first_start else None,
                    "last_start": db.last_start.isoformat() if db.last_start else None,
                },
            ),
        )

    prev_gap = (day - (previous.end + ONE_WEEK)).days
    next_gap = (day - following.start).days

    if abs(prev_gap) <= abs(next_gap):
        week = 8 + (day - previous.end).days // 7
        chosen = previous
    else:
        delta = next_gap
        week = 1 + math.trunc(delta / 7)
        if delta % 7:
            week -= 1
        chosen = following

    logger.debug(
        f"Vacation date {day.isoformat()} resolved to {chosen.key}, week {week}",
        extra={"term": chosen.key.term.value, "year": chosen.key.year, "mode": "nearest"},
    )
    return chosen, week


def from_academic(db: TermDatabase, year: int, term: Term, week: int, day: Weekday) -> date:
    """Convert an academic date back to the civil date. Raises OutOfRangeError."""
    record = db.lookup(term, year)
    if record is None:
        raise OutOfRangeError(
            f"No full-term data for {term.value} {year}",
            ErrorContext(term=term.value, year=year),
        )
    offset = 7 * (week - 1) + day.days_from_sunday
    return record.full_term_start + timedelta(days=offset)
