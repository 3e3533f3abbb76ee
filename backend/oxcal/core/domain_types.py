"""Domain Types — terms, weekdays and academic-date value objects.

Invariants:
    - Term cycle is fixed: Michaelmas(Y) -> Hilary(Y+1) -> Trinity(Y+1) -> Michaelmas(Y+1)
    - TermKey.year is the calendar year the term falls in (increments only at Michaelmas -> Hilary)
    - Weekday ordering starts at Sunday = 0 (week 1 begins on the full-term Sunday)
    - TermRecord.full_term_start is always a Sunday (enforced by core/term_database.py)

Design Decisions:
    - str Enums: serialize to JSON without custom encoders, render as their display names
    - Frozen dataclasses for keys/records: hashable, safe to share across readers
"""

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

from oxcal.core.format_dates import format_academic_date


ONE_WEEK = timedelta(weeks=1)
SEVEN_WEEKS = timedelta(weeks=7)


# ─── Enums ───────────────────────────────────────────────────────

class Term(str, Enum):
    """The three Oxford terms, in cycle order."""
    MICHAELMAS = "Michaelmas"
    HILARY = "Hilary"
    TRINITY = "Trinity"

    @classmethod
    def from_name(cls, name: str) -> "Term":
        """Case-insensitive lookup by display name. Raises ValueError if unknown."""
        wanted = name.strip().lower()
        for term in cls:
            if term.value.lower() == wanted:
                return term
        raise ValueError(f"Unknown term name: {name!r}")


class Weekday(str, Enum):
    """Days of the week, Sunday first."""
    SUNDAY = "Sunday"
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"

    @property
    def days_from_sunday(self) -> int:
        return list(Weekday).index(self)

    @classmethod
    def of(cls, day: date) -> "Weekday":
        # isoweekday: Monday=1 .. Sunday=7
        return list(cls)[day.isoweekday() % 7]


class ConversionMode(str, Enum):
    """How to_academic treats dates outside full term."""
    FULL_TERM = "full_term"
    EXT_TERM = "ext_term"
    NEAREST = "nearest"


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class TermKey:
    """A term in a specific calendar year, e.g. Hilary 2008."""
    term: Term
    year: int

    def next(self) -> "TermKey":
        """The following term in the fixed cycle."""
        if self.term is Term.MICHAELMAS:
            return TermKey(Term.HILARY, self.year + 1)
        if self.term is Term.HILARY:
            return TermKey(Term.TRINITY, self.year)
        return TermKey(Term.MICHAELMAS, self.year)

    def __str__(self) -> str:
        return f"{self.term.value} {self.year}"


@dataclass(frozen=True)
class TermRecord:
    """One dataset entry: the Sunday of 1st week for a term, and whether it is confirmed."""
    key: TermKey
    full_term_start: date
    provisional: bool = False


@dataclass(frozen=True)
class FullTermWindow:
    """Derived full-term span: start is Sunday of 1st week, end is Sunday of 8th week."""
    start: date
    end: date
    key: TermKey
    provisional: bool = False

    @classmethod
    def from_record(cls, record: TermRecord) -> "FullTermWindow":
        return cls(
            start=record.full_term_start,
            end=record.full_term_start + SEVEN_WEEKS,
            key=record.key,
            provisional=record.provisional,
        )

    def contains(self, day: date) -> bool:
        """True for any day from Sunday of 1st week to Saturday of 8th week."""
        return self.start <= day < self.end + ONE_WEEK


@dataclass(frozen=True)
class StatutoryInterval:
    """Regulation-defined term span, inclusive at both ends."""
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class AcademicDate:
    """An Oxford date: day of week, week of term, term and year."""
    day: Weekday
    week: int
    term: Term
    year: int

    @property
    def term_key(self) -> TermKey:
        return TermKey(self.term, self.year)

    def __str__(self) -> str:
        return format_academic_date(self)
