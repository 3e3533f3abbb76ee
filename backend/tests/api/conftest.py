"""API test fixtures — FastAPI test client over the built-in dataset.

Invariants:
    - app.state.calendar_source is set directly (ASGITransport does not run lifespan)
    - State restored after each test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from oxcal.infrastructure.calendar_source import CalendarSource
from oxcal.main import app


@pytest.fixture
async def client():
    original = getattr(app.state, "calendar_source", None)
    source = CalendarSource()
    source.get()
    app.state.calendar_source = source

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.state.calendar_source = original
