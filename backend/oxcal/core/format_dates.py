"""Date Formatting — canonical text for academic and civil dates.

Invariants:
    - Academic form is "<Weekday>, <N><suffix> week, <Term> <Year>"
    - Ordinal suffix is chosen from abs(week): 1 -> st, 2 -> nd, 3 -> rd, anything else -> th
      (so 11, 12, 13 render "th" and -2 renders "-2nd")
    - Civil form is DD/MM/YYYY
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from oxcal.core.domain_types import AcademicDate


_WEEK_SUFFIXES: dict[int, str] = {1: "st", 2: "nd", 3: "rd"}


def week_suffix(week: int) -> str:
    """English ordinal suffix for a week number."""
    return _WEEK_SUFFIXES.get(abs(week), "th")


def format_academic_date(academic_date: AcademicDate) -> str:
    """Render e.g. "Friday, 8th week, Michaelmas 2007"."""
    week = academic_date.week
    return (
        f"{academic_date.day.value}, {week}{week_suffix(week)} week, "
        f"{academic_date.term.value} {academic_date.year}"
    )


def format_civil_date(day: date) -> str:
    return day.strftime("%d/%m/%Y")


def parse_civil_date(text: str) -> date:
    """Decode a DD/MM/YYYY string. Raises ValueError on malformed input."""
    day, month, year = (int(part) for part in text.strip().split("/"))
    return date(year, month, day)
