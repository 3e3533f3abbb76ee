"""Free-Text Parsing — tests for tokenizing, abbreviation matching and defaults.

Tests cover:
    - Abbreviation tables: unambiguous prefixes only, full names always present
    - Ordinal suffixes and the literal word "week" are ignored
    - Numbers > 50 are years (+1900 below 1900); the last small number is the week
    - Weekday/term abbreviations, including ones only unambiguous within one vocabulary
    - Missing term defaults to today's term; missing year to today's year
    - Missing term with today outside the known terms is unparsable (None)
    - Text without both a week and a day is unparsable (None)
"""

from datetime import date

from oxcal.core.domain_types import AcademicDate, Term, Weekday
from oxcal.core.parse_text import (
    COMBINED_ABBREVIATIONS,
    TERM_ABBREVIATIONS,
    WEEKDAY_ABBREVIATIONS,
    build_abbreviations,
    parse_text,
    tokenize,
)

# Michaelmas 2007, 2nd week
TODAY = date(2007, 10, 17)


# ─── abbreviation tables ─────────────────────────────────────────

def test_build_abbreviations_keeps_only_unambiguous_prefixes():
    table = build_abbreviations(["Tuesday", "Thursday"])
    assert "t" not in table
    assert table["tu"] == "Tuesday"
    assert table["th"] == "Thursday"
    assert table["thursday"] == "Thursday"


def test_combined_table_separates_monday_and_michaelmas():
    assert "m" not in COMBINED_ABBREVIATIONS
    assert COMBINED_ABBREVIATIONS["mo"] == "Monday"
    assert COMBINED_ABBREVIATIONS["mi"] == "Michaelmas"
    assert COMBINED_ABBREVIATIONS["tr"] == "Trinity"
    assert COMBINED_ABBREVIATIONS["h"] == "Hilary"


def test_single_vocabulary_tables_resolve_m():
    assert WEEKDAY_ABBREVIATIONS["m"] == "Monday"
    assert TERM_ABBREVIATIONS["m"] == "Michaelmas"


# ─── tokenize ────────────────────────────────────────────────────

def test_tokenize_strips_week_and_ordinals():
    numbers, words = tokenize("Fri 3rd Week Hilary")
    assert numbers == [3]
    assert words == ["fri", "hilary"]


def test_tokenize_keeps_negative_numbers():
    numbers, _ = tokenize("monday -2nd week trinity 2009")
    assert numbers == [-2, 2009]


# ─── parse_text ──────────────────────────────────────────────────

def test_parse_abbreviated_day_and_term(builtin_db):
    assert parse_text(builtin_db, "fri 3rd week hilary", TODAY) == AcademicDate(
        Weekday.FRIDAY, 3, Term.HILARY, 2007,
    )


def test_parse_explicit_year(builtin_db):
    result = parse_text(builtin_db, "Tuesday, 5th week, Trinity 2009", TODAY)
    assert result == AcademicDate(Weekday.TUESDAY, 5, Term.TRINITY, 2009)


def test_parse_two_digit_style_year_gets_1900(builtin_db):
    result = parse_text(builtin_db, "wed 2 mich 99", TODAY)
    assert result == AcademicDate(Weekday.WEDNESDAY, 2, Term.MICHAELMAS, 1999)


def test_parse_last_week_number_wins(builtin_db):
    result = parse_text(builtin_db, "week 2 or rather 4 thursday hilary", TODAY)
    assert result.week == 4
    assert result.day is Weekday.THURSDAY


def test_parse_negative_week(builtin_db):
    result = parse_text(builtin_db, "sunday -1st week trinity", TODAY)
    assert result == AcademicDate(Weekday.SUNDAY, -1, Term.TRINITY, 2007)


def test_parse_single_letter_m_is_monday_then_term_from_rest(builtin_db):
    result = parse_text(builtin_db, "m 6 tr", TODAY)
    assert result == AcademicDate(Weekday.MONDAY, 6, Term.TRINITY, 2007)


def test_parse_defaults_term_to_today(builtin_db):
    result = parse_text(builtin_db, "saturday 8th week", TODAY)
    assert result == AcademicDate(Weekday.SATURDAY, 8, Term.MICHAELMAS, 2007)


def test_parse_without_week_is_unparsable(builtin_db):
    assert parse_text(builtin_db, "friday hilary", TODAY) is None


def test_parse_without_day_is_unparsable(builtin_db):
    assert parse_text(builtin_db, "3rd week hilary", TODAY) is None


def test_parse_fills_each_slot_once(builtin_db):
    result = parse_text(builtin_db, "wednesday or thu 1 hil", TODAY)
    assert result.day is Weekday.WEDNESDAY
    assert result.term is Term.HILARY


def test_parse_without_term_fails_when_today_is_outside_known_terms(builtin_db):
    assert parse_text(builtin_db, "friday 3rd week", date(2035, 2, 1)) is None


def test_parse_with_term_ignores_today_outside_known_terms(builtin_db):
    result = parse_text(builtin_db, "friday 3rd week hilary 2009", date(2035, 2, 1))
    assert result == AcademicDate(Weekday.FRIDAY, 3, Term.HILARY, 2009)
