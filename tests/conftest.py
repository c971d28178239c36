"""Shared pytest fixtures for the timer tests."""

import httpx
import pytest
from httpx import ASGITransport

from app.db.session import configure_engine, dispose_engine, init_db
from app.main import app
from app.services.timer.store_client import TimerStoreClient

from helpers import FakeClock, RecordingNotifier


@pytest.fixture(autouse=True)
async def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite+aiosqlite:///:memory:")
    await init_db()
    yield
    await dispose_engine()


@pytest.fixture
async def client():
    """HTTP client talking to the FastAPI app in-process."""
    transport = ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def store(client):
    return TimerStoreClient(client=client)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def notifier():
    """Notifier whose host grants permission when asked."""
    return RecordingNotifier()
