"""Term Database — immutable mapping of (term, year) to the Sunday of 1st week.

Invariants:
    - Keys are unique; a record's full_term_start is always a Sunday
    - Never mutated after construction: a reload builds a whole new TermDatabase
    - parse_calendar_data raises DataUnavailableError for any malformed record,
      so a half-valid dataset never becomes visible to readers

Design Decisions:
    - Pure data structure with no I/O: file reading lives in infrastructure/calendar_source.py
    - Accepts both the current record form ({start, provisional}) and the legacy
      bare "DD/MM/YYYY" string form
"""

from collections.abc import Iterable, Iterator, Mapping
from datetime import date
from types import MappingProxyType
from typing import Any

from oxcal.core.domain_types import FullTermWindow, Term, TermKey, TermRecord, Weekday
from oxcal.core.errors import DataUnavailableError
from oxcal.core.format_dates import parse_civil_date


class TermDatabase:
    """Read-only collection of TermRecords keyed by TermKey."""

    def __init__(self, records: Iterable[TermRecord] = ()):
        by_key: dict[TermKey, TermRecord] = {}
        for record in records:
            if record.key in by_key:
                raise ValueError(f"Duplicate term record for {record.key}")
            if Weekday.of(record.full_term_start) is not Weekday.SUNDAY:
                raise ValueError(
                    f"Full term for {record.key} must start on a Sunday, "
                    f"got {record.full_term_start.isoformat()}"
                )
            by_key[record.key] = record
        self._records = MappingProxyType(by_key)
        self._windows = tuple(sorted(
            (FullTermWindow.from_record(r) for r in by_key.values()),
            key=lambda w: w.start,
        ))

    def lookup(self, term: Term, year: int) -> TermRecord | None:
        return self._records.get(TermKey(term, year))

    def windows(self, confirmed: bool = False) -> tuple[FullTermWindow, ...]:
        """All known full terms sorted by start; confirmed=True drops provisional ones."""
        if not confirmed:
            return self._windows
        return tuple(w for w in self._windows if not w.provisional)

    @property
    def first_start(self) -> date | None:
        return self._windows[0].start if self._windows else None

    @property
    def last_start(self) -> date | None:
        return self._windows[-1].start if self._windows else None

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: object) -> bool:
        return key in self._records

    def __iter__(self) -> Iterator[TermRecord]:
        return (self._records[w.key] for w in self._windows)


# ─── Parsing ─────────────────────────────────────────────────────

def parse_term_key(label: str) -> TermKey:
    """Decode a dataset key such as "Hilary 2008". Raises ValueError."""
    parts = label.split()
    if len(parts) != 2:
        raise ValueError(f"Expected '<Term> <Year>', got {label!r}")
    return TermKey(Term.from_name(parts[0]), int(parts[1]))


def _parse_record(label: str, value: Any) -> TermRecord:
    key = parse_term_key(label)
    if isinstance(value, str):
        return TermRecord(key, parse_civil_date(value))
    if isinstance(value, Mapping):
        if "start" not in value:
            raise ValueError("missing 'start'")
        start = value["start"]
        # YAML may hand back a date object for ISO-formatted values
        if not isinstance(start, date):
            start = parse_civil_date(str(start))
        provisional = bool(int(value.get("provisional", 0) or 0))
        return TermRecord(key, start, provisional)
    raise ValueError(f"unsupported value of type {type(value).__name__}")


def parse_calendar_data(raw: Any, source: str = "<memory>") -> TermDatabase:
    """Build a TermDatabase from the decoded dataset document.

    The document must be a mapping with a top-level ``Calendar`` mapping whose
    keys are "<Term> <Year>". Empty entries are skipped.
    """
    if not isinstance(raw, Mapping) or not isinstance(raw.get("Calendar"), Mapping):
        raise DataUnavailableError("missing top-level 'Calendar' mapping", source)

    records = []
    for label, value in raw["Calendar"].items():
        if not value:
            continue
        try:
            records.append(_parse_record(str(label), value))
        except (ValueError, TypeError) as e:
            raise DataUnavailableError(
                f"could not decode entry {label!r}: {e}", source,
            ) from e

    try:
        return TermDatabase(records)
    except ValueError as e:
        raise DataUnavailableError(str(e), source) from e
