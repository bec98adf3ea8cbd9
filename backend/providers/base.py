"""
Response provider contract.
"""

from abc import ABC, abstractmethod
from typing import Sequence, Tuple

from domain import Turn


class ResponseProvider(ABC):
    """
    Produces one participant's reply to the current history.

    Implementations may raise ProviderError; the orchestrator recovers from it
    per turn.
    """

    @abstractmethod
    async def generate(self, participant_id: str, history: Sequence[Turn]) -> str:
        """
        Args:
            participant_id: Registered participant id
            history: Read-only snapshot of the transcript

        Returns:
            Reply text (may be empty; the orchestrator substitutes a fallback)
        """

    async def aclose(self) -> None:
        """Release transport resources, if any."""


def conversational_turns(history: Sequence[Turn]) -> Tuple[Turn, ...]:
    """History without informational marker turns."""
    return tuple(turn for turn in history if not turn.is_marker)


def is_opening_turn(history: Sequence[Turn]) -> bool:
    """True while the transcript holds only the message that opened the discussion."""
    return len(conversational_turns(history)) == 1
