"""Term Resolution — which statutory term a date is in, and which term comes next.

Invariants:
    - this_term returns at most one TermKey (statutory intervals are disjoint)
    - next_term always returns a TermKey; in vacation it is the first term reached
      scanning forward day by day (gaps between terms are well under a year)
    - Neither function consults the term database
"""

from datetime import date, timedelta

from oxcal.core.domain_types import TermKey
from oxcal.core.statutory_terms import statutory_intervals


_ONE_DAY = timedelta(days=1)
_MAX_SCAN_DAYS = 366


def this_term(day: date | None = None) -> TermKey | None:
    """The statutory term containing `day` (default today), or None in vacation."""
    day = day or date.today()
    for term, interval in statutory_intervals(day.year).items():
        if interval.contains(day):
            return TermKey(term, day.year)
    return None


def next_term(day: date | None = None) -> TermKey:
    """The term after the one containing `day`, or the next one to start if in vacation."""
    day = day or date.today()
    current = this_term(day)
    if current is not None:
        return current.next()

    for _ in range(_MAX_SCAN_DAYS):
        day += _ONE_DAY
        found = this_term(day)
        if found is not None:
            return found
    raise RuntimeError(f"No statutory term within a year of {day.isoformat()}")
