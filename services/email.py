"""
Email delivery for call notifications.

Defines the delivery interface the webhook depends on and the Resend
implementation. Delivery never raises for provider-side problems: every
outcome comes back as a DeliveryResult the caller branches on.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx
from fastapi import Request
from pydantic import SecretStr

from config import Settings
from schemas.notification import EmailNotification

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeliveryError:
    """Failure reported by (or on the way to) the email provider."""

    name: str
    message: str
    status_code: int | None = None


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of one send: either an email id or an error."""

    email_id: str | None = None
    error: DeliveryError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.email_id is not None

    @classmethod
    def success(cls, email_id: str) -> "DeliveryResult":
        return cls(email_id=email_id)

    @classmethod
    def failure(
        cls, name: str, message: str, status_code: int | None = None
    ) -> "DeliveryResult":
        return cls(error=DeliveryError(name=name, message=message, status_code=status_code))


class BaseEmailClient(ABC):
    """
    Abstract delivery capability.

    Implementations send one EmailNotification and report the outcome as a
    DeliveryResult. They must not raise for provider or transport failures.
    """

    @abstractmethod
    async def send(self, notification: EmailNotification) -> DeliveryResult:
        """Send the notification once. No retries."""
        pass

    async def aclose(self) -> None:
        """Release any underlying resources."""
        return None


class ResendEmailClient(BaseEmailClient):
    """
    Email client for the Resend REST API (POST /emails).

    Holds one httpx.AsyncClient for the lifetime of the application.
    """

    def __init__(
        self,
        api_key: SecretStr | str | None,
        base_url: str = "https://api.resend.com",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the Resend client.

        Args:
            api_key: Resend API key; when missing every send fails without a request
            base_url: Resend API base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        if isinstance(api_key, SecretStr):
            api_key = api_key.get_secret_value()
        self._api_key = api_key or None

        if not self._api_key:
            logger.warning("RESEND_API_KEY not set - email delivery will fail")

        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ResendEmailClient":
        return cls(
            api_key=settings.resend_api_key,
            base_url=settings.resend_api_url,
            timeout=settings.email_timeout_seconds,
        )

    @staticmethod
    def _build_payload(notification: EmailNotification) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "from": notification.sender,
            "to": [notification.recipient],
            "subject": notification.subject,
            "text": notification.text,
        }
        if notification.html:
            payload["html"] = notification.html
        return payload

    async def send(self, notification: EmailNotification) -> DeliveryResult:
        """
        Send the notification through Resend.

        Args:
            notification: Email to deliver

        Returns:
            DeliveryResult with the Resend email id, or the provider's error
        """
        if not self._api_key:
            return DeliveryResult.failure(
                name="missing_api_key",
                message="Missing API key. Set RESEND_API_KEY.",
            )

        try:
            response = await self._client.post(
                "/emails",
                json=self._build_payload(notification),
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
        except httpx.HTTPError as e:
            return DeliveryResult.failure(
                name="application_error",
                message=f"Unable to reach email provider: {e}",
            )

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.is_error:
            return DeliveryResult.failure(
                name=str(body.get("name") or "provider_error"),
                message=str(body.get("message") or response.reason_phrase),
                status_code=response.status_code,
            )

        email_id = body.get("id")
        if not email_id:
            return DeliveryResult.failure(
                name="invalid_response",
                message="Email provider response did not include an id",
                status_code=response.status_code,
            )

        return DeliveryResult.success(str(email_id))

    async def aclose(self) -> None:
        await self._client.aclose()


def get_email_client(request: Request) -> BaseEmailClient:
    """
    FastAPI dependency returning the application's email client.

    The client is created once in the main.py lifespan and stored on app.state.
    """
    return request.app.state.email_client
