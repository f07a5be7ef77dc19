"""
Notification formatting for call-ended events.

Turns a parsed CallEndedEvent into the EmailNotification sent to the
configured recipient: call time in the display timezone, duration in seconds,
and the transcript rendered as text (and optionally HTML).
"""

import math
from datetime import UTC, datetime
from html import escape
from zoneinfo import ZoneInfo

from config import Settings
from schemas.call_event import CallEndedEvent
from schemas.common import PlainTranscript, SpeakerRole, Transcript
from schemas.notification import EmailNotification

UNKNOWN_TIME = "Unknown time"
UNKNOWN_CALLER = "Unknown Caller"
UNKNOWN_NUMBER = "Unknown"

ROLE_LABELS: dict[SpeakerRole, str] = {
    SpeakerRole.AGENT: "🤖 Agent",
    SpeakerRole.CALLER: "👤 Caller",
}

# English names regardless of the process locale
WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _parse_timestamp(value: float | str) -> datetime:
    """Parse epoch milliseconds (number or numeric string) or an ISO-8601 string."""
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)

    if not math.isfinite(value):
        raise ValueError(f"Invalid start_timestamp: {value}")
    return datetime.fromtimestamp(value / 1000, tz=UTC)


def format_call_time(start_timestamp: float | str | None, timezone: str) -> str:
    """
    Render the call start as e.g. "Mon, Jan 5, 3:45 PM" in the given timezone.

    Args:
        start_timestamp: Epoch milliseconds or ISO-8601 string; None/0 means unknown
        timezone: IANA timezone name

    Returns:
        str: Localized call time, or "Unknown time"

    Raises:
        ValueError: If the timestamp cannot be parsed
    """
    if not start_timestamp:
        return UNKNOWN_TIME

    local = _parse_timestamp(start_timestamp).astimezone(ZoneInfo(timezone))
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return (
        f"{WEEKDAYS[local.weekday()]}, {MONTHS[local.month - 1]} {local.day}, "
        f"{hour}:{local.minute:02d} {meridiem}"
    )


def format_duration_seconds(call_duration_ms: float | None) -> int:
    """Convert milliseconds to whole seconds, rounding halves up."""
    if not call_duration_ms:
        return 0
    return math.floor(call_duration_ms / 1000 + 0.5)


def render_transcript(transcript: Transcript) -> str:
    """Render the transcript as plain text, one labelled paragraph per turn."""
    if isinstance(transcript, PlainTranscript):
        return transcript.text

    return "\n\n".join(
        f"{ROLE_LABELS[turn.role]}: {turn.content}" for turn in transcript.turns
    )


def _render_transcript_html(transcript: Transcript) -> str:
    if isinstance(transcript, PlainTranscript):
        body = escape(transcript.text).replace("\n", "<br>")
        return f'<p style="white-space: pre-wrap;">{body}</p>'

    return "\n".join(
        f"<p><strong>{escape(ROLE_LABELS[turn.role])}:</strong> {escape(turn.content)}</p>"
        for turn in transcript.turns
    )


def build_subject(from_number: str | None) -> str:
    return f"New Message from {from_number or UNKNOWN_CALLER}"


def build_notification(
    event: CallEndedEvent,
    transcript: Transcript,
    settings: Settings,
) -> EmailNotification:
    """
    Compose the email for one call.

    Args:
        event: Parsed call-ended event
        transcript: Transcript already resolved from the event
        settings: Application settings (addresses, timezone, HTML toggle)

    Returns:
        EmailNotification ready for delivery
    """
    from_number = event.from_number or UNKNOWN_NUMBER
    call_time = format_call_time(event.start_timestamp, settings.display_timezone)
    duration = format_duration_seconds(event.call_duration_ms)
    transcript_text = render_transcript(transcript)

    text = (
        "New Message\n\n"
        f"From: {from_number}\n"
        f"When: {call_time}\n"
        f"Duration: {duration}s\n\n"
        f"Transcript:\n{transcript_text}"
    )

    html = None
    if settings.email_include_html:
        footer = (
            f'<p style="color: #888; font-size: 12px;">Call ID: {escape(event.call_id)}</p>'
            if event.call_id
            else ""
        )
        html = (
            '<div style="font-family: sans-serif; max-width: 600px;">'
            "<h2>📞 New Message</h2>"
            "<table>"
            f"<tr><td><strong>From:</strong></td><td>{escape(from_number)}</td></tr>"
            f"<tr><td><strong>When:</strong></td><td>{escape(call_time)}</td></tr>"
            f"<tr><td><strong>Duration:</strong></td><td>{duration}s</td></tr>"
            "</table>"
            "<h3>Transcript</h3>"
            f"{_render_transcript_html(transcript)}"
            f"{footer}"
            "</div>"
        )

    return EmailNotification(
        sender=settings.from_email,
        recipient=settings.recipient_email,
        subject=build_subject(event.from_number),
        text=text,
        html=html,
    )
