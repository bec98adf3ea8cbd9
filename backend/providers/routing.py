"""
Picks the mock or remote provider per call based on the stored credential.
"""

import logging
from typing import Callable, Optional, Sequence

from domain import Turn

from .base import ResponseProvider

logger = logging.getLogger("CredentialRoutedProvider")


class CredentialRoutedProvider(ResponseProvider):
    """
    Routes to the remote provider when a credential is present, otherwise to the mock.

    The credential is read on every call, so saving or clearing a key takes
    effect at the next participant turn.
    """

    def __init__(
        self,
        mock: ResponseProvider,
        remote: ResponseProvider,
        credential: Callable[[], Optional[str]],
    ):
        self.mock = mock
        self.remote = remote
        self._credential = credential

    def select(self) -> ResponseProvider:
        return self.remote if self._credential() else self.mock

    async def generate(self, participant_id: str, history: Sequence[Turn]) -> str:
        provider = self.select()
        logger.debug(f"🔀 {participant_id} -> {type(provider).__name__}")
        return await provider.generate(participant_id, history)

    async def aclose(self) -> None:
        await self.remote.aclose()
        await self.mock.aclose()
