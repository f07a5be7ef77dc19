"""
Service layer for Call Notifier.

Provides notification formatting and email delivery for call-ended events.
"""

from services.email import (
    BaseEmailClient,
    DeliveryError,
    DeliveryResult,
    ResendEmailClient,
    get_email_client,
)
from services.notification import build_notification

__all__ = [
    "BaseEmailClient",
    "DeliveryError",
    "DeliveryResult",
    "ResendEmailClient",
    "get_email_client",
    "build_notification",
]
