"""Configuration for the Call Notifier service.

Typed, 12-factor settings via Pydantic v2. Manages the email provider credential,
sender/recipient addresses and notification formatting. No I/O or side effects at import.
"""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    # --- Pydantic model config  ---
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # --- App / Logging ---
    app_env: Literal["development", "test", "production"] = Field(
        default="development",
        description="Application environment (affects logging, docs exposure, etc.)",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Python logging verbosity level."
    )

    @property
    def is_prod(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def is_dev(self) -> bool:
        """Check if running in development environment."""
        return self.app_env == "development"

    # --- Email Provider (Resend) ---
    resend_api_key: SecretStr | None = Field(
        default=None,
        description="API key for Resend. Without it every delivery attempt fails.",
    )
    resend_api_url: str = Field(
        default="https://api.resend.com", description="Base URL of the Resend REST API."
    )
    email_timeout_seconds: float = Field(
        default=10.0, ge=1, le=60, description="Timeout for email API calls in seconds."
    )

    # --- Notification ---
    recipient_email: str = Field(
        default="charles@example.com",
        validation_alias=AliasChoices("recipient_email", "charles_email"),
        description="Fixed address every call notification is sent to (RECIPIENT_EMAIL, or legacy CHARLES_EMAIL).",
    )
    from_email: str = Field(
        default="messages@yourdomain.com",
        description="Sender address (must be a verified Resend domain).",
    )
    display_timezone: str = Field(
        default="America/Denver",
        description="IANA timezone used to render the call start time.",
    )
    email_include_html: bool = Field(
        default=True, description="Send an HTML body alongside the plain-text body."
    )

    # --- Webhook ---
    webhook_path: str = Field(
        default="/api/webhook", description="Path the call-ended webhook is served on."
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide singleton Settings instance (FastAPI DI-friendly).

    Settings are read once per process and never mutated afterwards.

    Example:
        ```python
        from fastapi import Depends
        from config import get_settings, Settings


        @app.get("/health")
        async def health(settings: Settings = Depends(get_settings)):
            return {"env": settings.app_env}
        ```
    """
    return Settings()
