"""Calendar Routes — HTTP access to conversion, term lookup and free-text parsing.

Invariants:
    - Omitted dates mean today; omitted mode means settings.default_mode
    - "Not in term" and "unparsable" are 200 responses with a null payload
    - OutOfRangeError propagates to the global handler (404 envelope)
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Query

from oxcal.config import get_settings
from oxcal.core.convert_dates import from_academic, to_academic
from oxcal.core.domain_types import ConversionMode, Term, Weekday
from oxcal.core.parse_text import parse_text
from oxcal.core.resolve_terms import next_term, this_term
from oxcal.core.term_database import TermDatabase
from oxcal.infrastructure.calendar_source import get_term_database
from oxcal.schemas.calendar import (
    AcademicDateOut,
    AcademicDateResponse,
    CivilDateResponse,
    NextTermResponse,
    ParsedDateOut,
    ParseRequest,
    ParseResponse,
    TermKeyOut,
    TermListResponse,
    TermWindowOut,
    ThisTermResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/calendar", tags=["calendar"])


@router.get("/academic-date", response_model=AcademicDateResponse)
async def get_academic_date(
    on: date | None = Query(None, alias="date"),
    mode: ConversionMode | None = None,
    confirmed: bool = False,
    db: TermDatabase = Depends(get_term_database),
):
    """Convert a civil date to an academic date."""
    day = on or date.today()
    result = to_academic(db, day, mode or get_settings().default_mode, confirmed)
    return AcademicDateResponse(
        academic_date=AcademicDateOut.from_domain(result) if result else None,
    )


@router.get("/civil-date", response_model=CivilDateResponse)
async def get_civil_date(
    year: int,
    term: Term,
    week: int,
    day: Weekday,
    db: TermDatabase = Depends(get_term_database),
):
    """Convert an academic date to a civil date."""
    return CivilDateResponse.from_domain(from_academic(db, year, term, week, day))


@router.get("/this-term", response_model=ThisTermResponse)
async def get_this_term(on: date | None = Query(None, alias="date")):
    key = this_term(on or date.today())
    return ThisTermResponse(term=TermKeyOut.from_domain(key) if key else None)


@router.get("/next-term", response_model=NextTermResponse)
async def get_next_term(on: date | None = Query(None, alias="date")):
    return NextTermResponse(term=TermKeyOut.from_domain(next_term(on or date.today())))


@router.post("/parse", response_model=ParseResponse)
async def parse_free_text(
    body: ParseRequest, db: TermDatabase = Depends(get_term_database),
):
    """Best-effort parse of text such as "fri 3rd week hilary"."""
    result = parse_text(db, body.text)
    if result is None:
        logger.info(f"Unparsable academic date text: {body.text!r}")
        return ParseResponse(parsed=None)
    return ParseResponse(parsed=ParsedDateOut(
        year=result.year, term=result.term, week=result.week, day=result.day,
    ))


@router.get("/terms", response_model=TermListResponse)
async def list_terms(
    confirmed: bool = False, db: TermDatabase = Depends(get_term_database),
):
    """All known full terms, optionally excluding provisional ones."""
    return TermListResponse(
        terms=[TermWindowOut.from_domain(w) for w in db.windows(confirmed)],
    )
