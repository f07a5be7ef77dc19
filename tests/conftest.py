"""Pytest configuration and shared fixtures.

Provides test settings, a recording fake email client and a FastAPI test
client with both wired in through dependency overrides.
"""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from schemas.notification import EmailNotification
from services.email import BaseEmailClient, DeliveryResult, get_email_client


class FakeEmailClient(BaseEmailClient):
    """Email client double that records every notification it is asked to send."""

    def __init__(self, result: DeliveryResult | None = None, raises: Exception | None = None):
        self.result = result or DeliveryResult.success("abc123")
        self.raises = raises
        self.sent: list[EmailNotification] = []

    async def send(self, notification: EmailNotification) -> DeliveryResult:
        self.sent.append(notification)
        if self.raises is not None:
            raise self.raises
        return self.result


@pytest.fixture
def test_settings():
    """Create test-specific settings."""
    return Settings(
        _env_file=None,
        app_env="test",
        log_level="ERROR",  # Reduce noise in tests
        resend_api_key="re_test_key",
        recipient_email="owner@example.com",
        from_email="calls@example.com",
        display_timezone="America/Denver",
    )


@pytest.fixture
def email_client():
    """Fake email client that succeeds with id 'abc123' by default."""
    return FakeEmailClient()


@pytest.fixture
def test_client(test_settings, email_client):
    """Create a FastAPI test client built from test settings with a fake email client."""
    app = create_app(test_settings)

    app.dependency_overrides[get_email_client] = lambda: email_client

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


# --- Test Data Factories ---


def epoch_ms(dt: datetime) -> int:
    """Convert an aware datetime to epoch milliseconds."""
    return int(dt.timestamp() * 1000)


@pytest.fixture
def call_start_ms():
    """Mon, Jan 5 2026, 3:45 PM in Denver."""
    return epoch_ms(datetime(2026, 1, 5, 15, 45, tzinfo=ZoneInfo("America/Denver")))


@pytest.fixture
def sample_call_event(call_start_ms):
    """Call-ended payload with a plain-text transcript."""
    return {
        "event": "call_ended",
        "call_id": "call_8f2a1c",
        "from_number": "+13035550142",
        "call_duration_ms": 125000,
        "start_timestamp": call_start_ms,
        "transcript": "  Hi, this is Dana. Please call me back about the quote.  ",
    }


@pytest.fixture
def sample_turns():
    """Structured transcript turns as sent by the voice platform."""
    return [
        {"role": "agent", "content": "Hello", "words": [{"word": "Hello", "start": 0.1}]},
        {"role": "user", "content": "Hi"},
    ]
