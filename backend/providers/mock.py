"""
Offline response provider with canned persona lines.

Used whenever no API key is configured, so the whole roundtable (pacing,
auto-continue, stop) still works in demo mode.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Mapping, Optional, Sequence

from domain import MockReplies, Turn

from .base import ResponseProvider, is_opening_turn

logger = logging.getLogger("MockProvider")

GENERIC_OPENING = "Interesting question. Let me think about it out loud with everyone here."
GENERIC_FOLLOW_UP = "I'd like to hear more before I commit to a position."


class MockResponseProvider(ResponseProvider):
    """
    Reply text is a pure function of (participant_id, is_opening_turn).

    Args:
        replies: Canned replies keyed by participant id
        latency: Simulated thinking time in seconds (0 disables it)
        sleep: Awaitable sleep function, injectable for tests
    """

    def __init__(
        self,
        replies: Optional[Mapping[str, MockReplies]] = None,
        latency: float = 0.0,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        self.replies = dict(replies or {})
        self.latency = latency
        self._sleep = sleep or asyncio.sleep

    def reply_for(self, participant_id: str, opening: bool) -> str:
        canned = self.replies.get(participant_id)
        if canned is None:
            return GENERIC_OPENING if opening else GENERIC_FOLLOW_UP
        return canned.pick(opening)

    async def generate(self, participant_id: str, history: Sequence[Turn]) -> str:
        if self.latency > 0:
            await self._sleep(self.latency)
        opening = is_opening_turn(history)
        logger.debug(f"🎭 Mock reply | {participant_id} | opening={opening}")
        return self.reply_for(participant_id, opening)
