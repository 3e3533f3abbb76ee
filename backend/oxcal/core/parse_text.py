"""Free-Text Parsing — best-effort extraction of an academic date from loose text.

Invariants:
    - Returns None unless both a week number and a weekday were found
    - Numbers > 50 are years (two-digit-style values < 1900 get +1900); every other number
      is a week number and the last one wins
    - Abbreviations follow unambiguous-prefix rules over weekday and term names: "f" is Friday,
      "tu"/"th" split Tuesday/Thursday, "m" is ambiguous until the single-vocabulary passes
    - Longest abbreviation is tried first; each matched word is consumed once
    - Missing term defaults to today's term, missing year to today's calendar year;
      when today's term cannot be resolved the parse fails (None)

Design Decisions:
    - Tokenize once (numbers, words) and run table-driven prefix matching over the word list
      instead of rewriting the input string between passes
    - The +1900 rule for small years is kept as legacy behaviour
"""

from collections.abc import Iterable
from datetime import date
import re

from oxcal.core.convert_dates import to_academic
from oxcal.core.domain_types import AcademicDate, Term, Weekday
from oxcal.core.errors import OutOfRangeError
from oxcal.core.term_database import TermDatabase


_ORDINAL_RE = re.compile(r"(\d+)(?:st|nd|rd|th)")
_TOKEN_RE = re.compile(r"-?\d+|[a-z]+")
_NUMBER_RE = re.compile(r"-?\d+")

YEAR_THRESHOLD = 50
CENTURY_BASE = 1900


def build_abbreviations(names: Iterable[str]) -> dict[str, str]:
    """Map every unambiguous lower-case prefix of each name to the name.

    A full name is always its own abbreviation, even if it prefixes another name.
    """
    names = list(names)
    owners: dict[str, set[str]] = {}
    for name in names:
        lowered = name.lower()
        for length in range(1, len(lowered) + 1):
            owners.setdefault(lowered[:length], set()).add(name)

    table = {prefix: next(iter(found)) for prefix, found in owners.items() if len(found) == 1}
    for name in names:
        table[name.lower()] = name
    return table


_WEEKDAY_NAMES = [d.value for d in Weekday]
_TERM_NAMES = [t.value for t in Term]

COMBINED_ABBREVIATIONS = build_abbreviations(_WEEKDAY_NAMES + _TERM_NAMES)
WEEKDAY_ABBREVIATIONS = build_abbreviations(_WEEKDAY_NAMES)
TERM_ABBREVIATIONS = build_abbreviations(_TERM_NAMES)


def _longest_first(table: dict[str, str]) -> list[str]:
    return sorted(table, key=len, reverse=True)


def tokenize(text: str) -> tuple[list[int], list[str]]:
    """Split normalized text into signed integers and lower-case words."""
    text = text.lower().replace("week", " ")
    text = _ORDINAL_RE.sub(r"\1", text)
    numbers: list[int] = []
    words: list[str] = []
    for token in _TOKEN_RE.findall(text):
        if _NUMBER_RE.fullmatch(token):
            numbers.append(int(token))
        else:
            words.append(token)
    return numbers, words


def _match_words(
    words: list[str], consumed: set[int], table: dict[str, str], wanted,
) -> Iterable[str]:
    """Yield expansions for unconsumed words, longest abbreviation first.

    `wanted(name)` is re-checked before each key so a filled slot stops matching.
    """
    for key in _longest_first(table):
        name = table[key]
        if not wanted(name):
            continue
        for i, word in enumerate(words):
            if i not in consumed and word.startswith(key):
                consumed.add(i)
                yield name
                break


def parse_text(
    db: TermDatabase, text: str, today: date | None = None,
) -> AcademicDate | None:
    """Divine (year, term, week, day) from free text such as "fri 3rd week hilary"."""
    today = today or date.today()
    year: int | None = None
    week: int | None = None
    term: Term | None = None
    day: Weekday | None = None

    numbers, words = tokenize(text)
    for value in numbers:
        if value > YEAR_THRESHOLD:
            year = value + CENTURY_BASE if value < CENTURY_BASE else value
        else:
            week = value

    consumed: set[int] = set()

    def wants_day(name: str) -> bool:
        return day is None and name in _WEEKDAY_NAMES

    def wants_term(name: str) -> bool:
        return term is None and name in _TERM_NAMES

    for name in _match_words(
        words, consumed, COMBINED_ABBREVIATIONS,
        lambda n: wants_day(n) or wants_term(n),
    ):
        if name in _WEEKDAY_NAMES:
            day = Weekday(name)
        else:
            term = Term(name)

    if day is None:
        for name in _match_words(words, consumed, WEEKDAY_ABBREVIATIONS, wants_day):
            day = Weekday(name)

    if term is None:
        for name in _match_words(words, consumed, TERM_ABBREVIATIONS, wants_term):
            term = Term(name)

    if term is None:
        try:
            current = to_academic(db, today)
        except OutOfRangeError:
            return None
        if current is None:
            return None
        term = current.term

    if year is None:
        year = today.year

    if week is None or day is None:
        return None
    return AcademicDate(day, week, term, year)
