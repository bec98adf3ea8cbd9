"""
Domain layer for internal business logic data structures.

This package contains the immutable value types shared between the
orchestrator, the providers and the HTTP boundary.
"""

from .enums import RESERVED_SPEAKERS, Speaker
from .participant import MockReplies, Participant
from .turn import Turn

__all__ = [
    "MockReplies",
    "Participant",
    "RESERVED_SPEAKERS",
    "Speaker",
    "Turn",
]
