"""Shared test fixtures for all test modules."""

from collections.abc import Callable
from datetime import datetime

import pytest
from tests.helpers import utc

from leadlens.core.models import LeadRecord, MessageEvent

try:
    import httpx
except ImportError:
    httpx = None


@pytest.fixture
def make_message() -> Callable[..., MessageEvent]:
    """Factory fixture for MessageEvent objects with sensible defaults."""
    counter = iter(range(1, 1_000_000))

    def _make(
        session_id: str = "sess-1",
        occurred_at: datetime | None = None,
        sender: str = "user",
        text: str = "ciao",
    ) -> MessageEvent:
        return MessageEvent(
            id=f"m{next(counter)}",
            session_id=session_id,
            sender=sender,
            text=text,
            occurred_at=occurred_at or utc(2024, 6, 1),
        )

    return _make


@pytest.fixture
def make_lead() -> Callable[..., LeadRecord]:
    """Factory fixture for LeadRecord objects with sensible defaults."""
    counter = iter(range(1, 1_000_000))

    def _make(
        name: str = "Mario Rossi",
        email: str = "mario@b.com",
        phone: str = "",
        message: str = "",
        source: str = "web",
        occurred_at: datetime | None = None,
    ) -> LeadRecord:
        return LeadRecord(
            id=f"l{next(counter)}",
            name=name,
            email=email,
            phone=phone,
            message=message,
            source=source,
            occurred_at=occurred_at or utc(2024, 6, 1),
        )

    return _make


@pytest.fixture
def asgi_test_client():
    """Factory fixture that creates an httpx.AsyncClient for ASGI testing.

    Usage:
        async def test_something(asgi_test_client):
            async with asgi_test_client(app) as client:
                response = await client.get("/leads")
    """
    if httpx is None:
        pytest.skip("httpx not installed")

    def _get_client(app):
        """Return an AsyncClient context manager for the given app."""
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )

    return _get_client
