"""
Turn: one entry of the shared roundtable transcript.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from .enums import Speaker


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Turn:
    """
    A single immutable transcript entry.

    Attributes:
        speaker: "user", "system" or a participant id
        content: Text as persisted (participant turns carry a "<name> said: " prefix)
        timestamp: When the turn was created (UTC)
    """

    speaker: str
    content: str
    timestamp: datetime = field(default_factory=_utcnow)

    @property
    def is_user(self) -> bool:
        return self.speaker == Speaker.USER.value

    @property
    def is_marker(self) -> bool:
        """Informational system turns (e.g. the reset marker)."""
        return self.speaker == Speaker.SYSTEM.value

    @classmethod
    def from_user(cls, content: str) -> "Turn":
        return cls(speaker=Speaker.USER.value, content=content)

    @classmethod
    def marker(cls, content: str) -> "Turn":
        return cls(speaker=Speaker.SYSTEM.value, content=content)
