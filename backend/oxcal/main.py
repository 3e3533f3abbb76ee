"""Oxford Calendar API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CalendarError → structured JSON responses
    - Term database loaded on startup; a missing or corrupt dataset stops startup
      instead of surfacing on the first request

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - CalendarSource stored on app.state and handed to routes through a dependency
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from oxcal.api.error_handlers import register_error_handlers
from oxcal.api.routes import calendar, health
from oxcal.config import get_settings
from oxcal.infrastructure.calendar_source import CalendarSource, resolve_calendar_path
from oxcal.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    source = CalendarSource(
        resolve_calendar_path(settings.calendar_path, settings.system_calendar_path),
    )
    source.get()
    app.state.calendar_source = source
    logger.info("Oxford Calendar API started", extra={"source": source.source})
    yield
    logger.info("Oxford Calendar API shutting down")


app = FastAPI(
    title="Oxford Calendar API", version="1.0.0", lifespan=lifespan,
)

# CORS origins come from settings
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(calendar.router)

register_error_handlers(app)
