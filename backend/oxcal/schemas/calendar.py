"""Calendar Schemas — Pydantic models for the conversion endpoints.

Invariants:
    - Absent results (not in term, unparsable text) are explicit nulls, never 404s
    - Every academic date response carries its canonical text rendering
    - ParseRequest.text: 1-200 chars, stripped, non-empty

Design Decisions:
    - Domain enums (Term, Weekday) used directly as field types: Pydantic validates
      the display names and serializes them back unchanged
"""

from datetime import date

from pydantic import BaseModel, Field, field_validator

from oxcal.core.domain_types import (
    AcademicDate, FullTermWindow, Term, TermKey, Weekday,
)
from oxcal.core.format_dates import format_academic_date, format_civil_date


class AcademicDateOut(BaseModel):
    """An academic date plus its "Friday, 1st week, Michaelmas 2007" rendering."""
    day: Weekday
    week: int
    term: Term
    year: int
    text: str

    @classmethod
    def from_domain(cls, academic_date: AcademicDate) -> "AcademicDateOut":
        return cls(
            day=academic_date.day,
            week=academic_date.week,
            term=academic_date.term,
            year=academic_date.year,
            text=format_academic_date(academic_date),
        )


class AcademicDateResponse(BaseModel):
    academic_date: AcademicDateOut | None


class CivilDateResponse(BaseModel):
    """Civil date as ISO value and DD/MM/YYYY text."""
    civil_date: date
    text: str

    @classmethod
    def from_domain(cls, day: date) -> "CivilDateResponse":
        return cls(civil_date=day, text=format_civil_date(day))


class TermKeyOut(BaseModel):
    term: Term
    year: int

    @classmethod
    def from_domain(cls, key: TermKey) -> "TermKeyOut":
        return cls(term=key.term, year=key.year)


class ThisTermResponse(BaseModel):
    term: TermKeyOut | None


class NextTermResponse(BaseModel):
    term: TermKeyOut


class ParseRequest(BaseModel):
    """Free-text academic date, e.g. "fri 3rd week hilary"."""
    text: str = Field(min_length=1, max_length=200)

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("text cannot be empty or whitespace")
        return v


class ParsedDateOut(BaseModel):
    year: int
    term: Term
    week: int
    day: Weekday


class ParseResponse(BaseModel):
    parsed: ParsedDateOut | None


class TermWindowOut(BaseModel):
    """A known full term: Sunday of 1st week to Sunday of 8th week."""
    term: Term
    year: int
    start: date
    end: date
    provisional: bool

    @classmethod
    def from_domain(cls, window: FullTermWindow) -> "TermWindowOut":
        return cls(
            term=window.key.term,
            year=window.key.year,
            start=window.start,
            end=window.end,
            provisional=window.provisional,
        )


class TermListResponse(BaseModel):
    terms: list[TermWindowOut]
