"""
Inbound call-ended webhook payload.

The voice platform is untrusted and every field is optional, so the model is
lenient: unknown keys are ignored and numeric identifiers are coerced to
strings. The event is read-only once parsed.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.common import PlainTranscript, SpeakerRole, Transcript, Turn, TurnTranscript


class TranscriptTurn(BaseModel):
    """Raw transcript turn as sent by the platform."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    role: str | None = Field(default=None, description="Speaker role, e.g. 'agent' or 'user'")
    content: str = Field(default="", description="Utterance text")


class CallEndedEvent(BaseModel):
    """
    Call-ended event posted by the voice-agent platform.

    Only the fields needed for the notification are modelled; the rest of the
    platform payload is dropped.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        json_schema_extra={
            "examples": [
                {
                    "call_id": "call_8f2a1c",
                    "from_number": "+13035550142",
                    "call_duration_ms": 125000,
                    "start_timestamp": 1767653100000,
                    "transcript": [
                        {"role": "agent", "content": "Hi, you've reached Charles. How can I help?"},
                        {"role": "user", "content": "Please call me back about the quote."},
                    ],
                }
            ]
        },
    )

    transcript: str | list[TranscriptTurn] | None = Field(
        default=None, description="Plain-text transcript or ordered speaker turns"
    )
    call_id: str | None = Field(default=None, description="Platform call identifier")
    from_number: str | None = Field(default=None, description="Caller phone number")
    call_duration_ms: float | None = Field(
        default=None, ge=0, description="Call duration in milliseconds"
    )
    start_timestamp: float | str | None = Field(
        default=None, description="Call start as epoch milliseconds (or ISO-8601 string)"
    )

    @field_validator("call_id", "from_number", mode="before")
    @classmethod
    def number_to_str(cls, v: Any) -> Any:
        """Accept numeric identifiers (some platforms send phone numbers as numbers)."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("transcript", mode="before")
    @classmethod
    def zero_transcript_is_empty(cls, v: Any) -> Any:
        """Treat a numeric zero transcript as absent; any other number is rejected."""
        if isinstance(v, (int, float)) and not v:
            return None
        return v

    def resolve_transcript(self) -> Transcript | None:
        """
        Resolve the raw transcript into the ``Transcript`` variant.

        Returns:
            PlainTranscript for non-blank text, TurnTranscript for a non-empty
            turn list, or None when the call produced nothing worth sending.
        """
        if self.transcript is None:
            return None

        if isinstance(self.transcript, str):
            text = self.transcript.strip()
            return PlainTranscript(text=text) if text else None

        if not self.transcript:
            return None

        return TurnTranscript(
            turns=tuple(
                Turn(role=SpeakerRole.from_raw(turn.role), content=turn.content)
                for turn in self.transcript
            )
        )
