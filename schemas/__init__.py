"""
Pydantic schemas for Call Notifier.

Provides data models for:
- The inbound call-ended webhook payload
- Transcript variants (plain text vs. speaker turns)
- The outbound email and webhook response bodies
"""

# Transcript types
from schemas.common import PlainTranscript, SpeakerRole, Transcript, Turn, TurnTranscript

# Inbound payload
from schemas.call_event import CallEndedEvent, TranscriptTurn

# Outbound email and responses
from schemas.notification import (
    EmailNotification,
    ErrorResponse,
    SkippedResponse,
    SuccessResponse,
)

__all__ = [
    # Transcript
    "PlainTranscript",
    "SpeakerRole",
    "Transcript",
    "Turn",
    "TurnTranscript",
    # Inbound
    "CallEndedEvent",
    "TranscriptTurn",
    # Outbound
    "EmailNotification",
    "ErrorResponse",
    "SkippedResponse",
    "SuccessResponse",
]
