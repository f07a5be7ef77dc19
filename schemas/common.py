"""
Common types for call transcripts.

A transcript arrives either as one block of text or as an ordered list of
speaker turns. Both shapes are resolved once into the ``Transcript`` variant so
formatting code never has to inspect raw payload types.
"""

from dataclasses import dataclass
from enum import Enum


class SpeakerRole(str, Enum):
    """Who spoke a transcript turn."""

    AGENT = "agent"
    CALLER = "caller"

    @classmethod
    def from_raw(cls, role: str | None) -> "SpeakerRole":
        """Map a platform role string onto a speaker.

        Only ``agent`` identifies the voice agent; everything else
        (``user``, ``caller``, unknown values) is the human on the line.
        """
        if role and role.strip().lower() == cls.AGENT.value:
            return cls.AGENT
        return cls.CALLER


@dataclass(frozen=True)
class Turn:
    """One utterance in a structured transcript."""

    role: SpeakerRole
    content: str


@dataclass(frozen=True)
class PlainTranscript:
    """Transcript delivered as a single block of text."""

    text: str


@dataclass(frozen=True)
class TurnTranscript:
    """Transcript delivered as ordered speaker turns."""

    turns: tuple[Turn, ...]


Transcript = PlainTranscript | TurnTranscript
