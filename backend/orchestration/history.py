"""
Append-only conversation history shared by every participant.
"""

from typing import Iterator, List, Optional, Tuple

from domain import Turn


class ConversationHistory:
    """
    Ordered, append-only log of turns.

    Only the orchestrator writes to it. Providers receive tuples from
    snapshot(), so turns appended while a call is in flight stay invisible
    to that call.
    """

    def __init__(self, turns: Optional[List[Turn]] = None):
        self._turns: List[Turn] = list(turns or [])

    def append(self, turn: Turn) -> None:
        self._turns.append(turn)

    def snapshot(self) -> Tuple[Turn, ...]:
        return tuple(self._turns)

    def reset(self, marker: Turn) -> None:
        """
        Clear the log and leave a single informational marker turn.

        Must not be called while a sweep is running; the orchestrator guards this.
        """
        self._turns = [marker]

    def last(self) -> Optional[Turn]:
        return self._turns[-1] if self._turns else None

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(self.snapshot())
