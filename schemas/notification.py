"""
Outbound notification and webhook response schemas.

Defines data models for:
- The email handed to the delivery provider
- Each JSON body the webhook endpoint can return
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class EmailNotification(BaseModel):
    """Email built from one call-ended event and handed to the provider once."""

    model_config = ConfigDict(frozen=True)

    sender: str = Field(description="From address")
    recipient: str = Field(description="To address")
    subject: str
    text: str = Field(description="Plain-text body")
    html: str | None = Field(default=None, description="Optional HTML body")


class SkippedResponse(BaseModel):
    """Returned when the call has no transcript; nothing is sent."""

    status: Literal["skipped"] = "skipped"
    reason: str = "no transcript"


class SuccessResponse(BaseModel):
    """Returned after the provider accepted the email."""

    model_config = ConfigDict(populate_by_name=True)

    status: Literal["success"] = "success"
    email_id: str = Field(alias="emailId")
    sent_to: str | None = Field(default=None, alias="sentTo")


class ErrorResponse(BaseModel):
    """Error body shared by the 405 and 500 responses."""

    error: str
    details: str | None = None
    message: str | None = None
