"""Tests for the Resend email client.

Uses httpx.MockTransport so no request leaves the process.
"""

import json

import httpx
import pytest

from schemas.notification import EmailNotification
from services.email import DeliveryResult, ResendEmailClient


@pytest.fixture
def notification():
    """Notification with both text and HTML bodies."""
    return EmailNotification(
        sender="calls@example.com",
        recipient="owner@example.com",
        subject="New Message from +13035550142",
        text="New Message\n\nTranscript:\nhello",
        html="<p>hello</p>",
    )


def _client(handler, api_key: str | None = "re_test_key") -> ResendEmailClient:
    return ResendEmailClient(
        api_key=api_key,
        base_url="https://api.resend.test/",
        transport=httpx.MockTransport(handler),
    )


class TestResendEmailClient:
    """Test Resend delivery outcomes."""

    @pytest.mark.asyncio
    async def test_send_success(self, notification):
        """Test that a 200 response yields the provider's email id."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"id": "abc123"})

        client = _client(handler)
        result = await client.send(notification)
        await client.aclose()

        assert result == DeliveryResult.success("abc123")
        assert result.ok

        assert len(requests) == 1
        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://api.resend.test/emails"
        assert request.headers["Authorization"] == "Bearer re_test_key"
        assert json.loads(request.content) == {
            "from": "calls@example.com",
            "to": ["owner@example.com"],
            "subject": "New Message from +13035550142",
            "text": "New Message\n\nTranscript:\nhello",
            "html": "<p>hello</p>",
        }

    @pytest.mark.asyncio
    async def test_html_omitted_when_absent(self, notification):
        """Test that the html field is not sent for text-only notifications."""
        captured: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured.update(json.loads(request.content))
            return httpx.Response(200, json={"id": "abc123"})

        client = _client(handler)
        await client.send(notification.model_copy(update={"html": None}))
        await client.aclose()

        assert "html" not in captured

    @pytest.mark.asyncio
    async def test_provider_error(self, notification):
        """Test that a provider error body is returned as a DeliveryError."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                403,
                json={
                    "statusCode": 403,
                    "name": "validation_error",
                    "message": "The yourdomain.com domain is not verified.",
                },
            )

        client = _client(handler)
        result = await client.send(notification)
        await client.aclose()

        assert not result.ok
        assert result.error.name == "validation_error"
        assert result.error.message == "The yourdomain.com domain is not verified."
        assert result.error.status_code == 403

    @pytest.mark.asyncio
    async def test_provider_error_without_json(self, notification):
        """Test that a non-JSON error falls back to the HTTP reason phrase."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="<html>Bad Gateway</html>")

        client = _client(handler)
        result = await client.send(notification)
        await client.aclose()

        assert result.error.name == "provider_error"
        assert result.error.message == "Bad Gateway"
        assert result.error.status_code == 502

    @pytest.mark.asyncio
    async def test_missing_id(self, notification):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={})

        client = _client(handler)
        result = await client.send(notification)
        await client.aclose()

        assert result.error.name == "invalid_response"

    @pytest.mark.asyncio
    async def test_transport_error(self, notification):
        """Test that network failures are returned, not raised."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        client = _client(handler)
        result = await client.send(notification)
        await client.aclose()

        assert result.error.name == "application_error"
        assert "timed out" in result.error.message

    @pytest.mark.asyncio
    async def test_missing_api_key(self, notification):
        """Test that no request is made without an API key."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={"id": "abc123"})

        client = _client(handler, api_key=None)
        result = await client.send(notification)
        await client.aclose()

        assert result.error.name == "missing_api_key"
        assert calls == []

    def test_from_settings(self, test_settings):
        client = ResendEmailClient.from_settings(test_settings)

        assert client._api_key == "re_test_key"
        assert str(client._client.base_url).rstrip("/") == "https://api.resend.com"
