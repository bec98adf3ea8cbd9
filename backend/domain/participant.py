"""
Participant definitions for the roundtable.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Participant:
    """
    A named agent with a fixed backend model.

    Attributes:
        id: Unique, stable identifier (e.g. "claude")
        display_name: Name shown to users and used in the "<name> said:" prefix
        backend_model_ref: Model identifier sent to the chat-completions endpoint
    """

    id: str
    display_name: str
    backend_model_ref: str


@dataclass(frozen=True)
class MockReplies:
    """Canned lines the offline provider uses for one participant."""

    opening: str
    follow_up: str

    def pick(self, is_opening_turn: bool) -> str:
        return self.opening if is_opening_turn else self.follow_up
