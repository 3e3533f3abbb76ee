"""Statutory Term Dates — regulation-defined term spans for a calendar year.

Invariants:
    - Pure function of the year: nothing stored, recomputed on every call
    - Michaelmas: 1 Oct to 17 Dec. Hilary: 7 Jan to Easter Sunday - 13 days.
      Trinity: the Wednesday after Easter to 6 Jul
    - Hilary end collapses to 25 Mar only when Easter - 13 days is 26 Mar;
      Trinity start collapses to 20 Apr only when Easter + 3 days is 21 Apr
    - Within a year: Hilary < Trinity < Michaelmas, non-overlapping

Design Decisions:
    - Easter Sunday from dateutil.easter (Western/Gregorian method) rather than a local
      computus implementation
"""

from datetime import date, timedelta

from dateutil.easter import EASTER_WESTERN, easter

from oxcal.core.domain_types import StatutoryInterval, Term


MICHAELMAS_START = (10, 1)
MICHAELMAS_END = (12, 17)
HILARY_START = (1, 7)
HILARY_LATEST_END = (3, 25)
TRINITY_EARLIEST_START = (4, 20)
TRINITY_END = (7, 6)


def hilary_end(year: int) -> date:
    """Easter Sunday minus 13 days, or 25 Mar when that lands on 26 Mar."""
    end = easter(year, EASTER_WESTERN) - timedelta(days=13)
    limit = date(year, *HILARY_LATEST_END)
    if (end - limit).days == 1:
        return limit
    return end


def trinity_start(year: int) -> date:
    """Wednesday after Easter Sunday."""
    start = easter(year, EASTER_WESTERN) + timedelta(days=3)
    limit = date(year, *TRINITY_EARLIEST_START)
    if (start - limit).days == 1:
        return limit
    return start


def statutory_intervals(year: int) -> dict[Term, StatutoryInterval]:
    """Statutory start/end of each term falling in calendar year `year`."""
    return {
        Term.HILARY: StatutoryInterval(date(year, *HILARY_START), hilary_end(year)),
        Term.TRINITY: StatutoryInterval(trinity_start(year), date(year, *TRINITY_END)),
        Term.MICHAELMAS: StatutoryInterval(
            date(year, *MICHAELMAS_START), date(year, *MICHAELMAS_END),
        ),
    }
