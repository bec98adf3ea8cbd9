"""
Domain enums for type-safe constants.
"""

from enum import Enum


class Speaker(str, Enum):
    """Reserved speaker tags. Participant turns use the participant id instead."""

    USER = "user"
    SYSTEM = "system"

    def __str__(self) -> str:
        return self.value


RESERVED_SPEAKERS = frozenset(s.value for s in Speaker)
