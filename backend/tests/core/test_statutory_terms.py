"""Statutory Term Dates — tests for fixed and Easter-relative term boundaries.

Tests cover:
    - Fixed points: Michaelmas 1 Oct-17 Dec, Hilary from 7 Jan, Trinity to 6 Jul
    - Hilary ends Easter - 13 days, collapsing to 25 Mar only when that is 26 Mar
    - Trinity starts Easter + 3 days, collapsing to 20 Apr only when that is 21 Apr
    - Terms never overlap and follow cycle order across year boundaries
"""

from datetime import date

import pytest

from oxcal.core.domain_types import Term
from oxcal.core.statutory_terms import hilary_end, statutory_intervals, trinity_start


def test_fixed_regulation_points():
    intervals = statutory_intervals(2009)
    assert intervals[Term.MICHAELMAS].start == date(2009, 10, 1)
    assert intervals[Term.MICHAELMAS].end == date(2009, 12, 17)
    assert intervals[Term.HILARY].start == date(2009, 1, 7)
    assert intervals[Term.TRINITY].end == date(2009, 7, 6)


def test_hilary_ends_thirteen_days_before_easter():
    # Easter 2009 is 12 April
    assert hilary_end(2009) == date(2009, 3, 30)


@pytest.mark.parametrize("year", [2007, 2012])
def test_hilary_end_collapses_to_25_march(year):
    # Easter on 8 April puts Easter - 13 days on 26 March
    assert hilary_end(year) == date(year, 3, 25)


def test_hilary_end_not_collapsed_when_earlier_than_26_march():
    # Easter 2008 is 23 March
    assert hilary_end(2008) == date(2008, 3, 10)


def test_trinity_starts_wednesday_after_easter():
    assert trinity_start(2009) == date(2009, 4, 15)
    assert trinity_start(2009).isoweekday() == 3


def test_trinity_start_collapses_to_20_april():
    # Easter 2049 is 18 April, so the Wednesday is 21 April
    assert trinity_start(2049) == date(2049, 4, 20)


def test_trinity_start_not_collapsed_when_later():
    # Easter 2011 is 24 April
    assert trinity_start(2011) == date(2011, 4, 27)


@pytest.mark.parametrize("year", range(1950, 2101, 7))
def test_terms_are_ordered_and_disjoint(year):
    this_year = statutory_intervals(year)
    next_year = statutory_intervals(year + 1)
    assert this_year[Term.HILARY].start < this_year[Term.HILARY].end
    assert this_year[Term.HILARY].end < this_year[Term.TRINITY].start
    assert this_year[Term.TRINITY].end < this_year[Term.MICHAELMAS].start
    assert this_year[Term.MICHAELMAS].end < next_year[Term.HILARY].start


def test_intervals_are_inclusive():
    michaelmas = statutory_intervals(2007)[Term.MICHAELMAS]
    assert michaelmas.contains(date(2007, 10, 1))
    assert michaelmas.contains(date(2007, 12, 17))
    assert not michaelmas.contains(date(2007, 12, 18))
