"""
Persistent storage for the optional remote API credential.

The value is loaded once at startup and cached in memory, so providers can
read it synchronously on every turn. An absent credential selects the mock
provider.
"""

import logging
from typing import Optional

import crud
from core.settings import CREDENTIAL_STORAGE_KEY
from sqlalchemy.ext.asyncio import async_sessionmaker

logger = logging.getLogger("CredentialStore")


class CredentialStore:
    """
    Args:
        session_maker: Async session factory for the settings database
        key: Storage key of the credential
        default: Value used when nothing is stored (e.g. OPENROUTER_API_KEY from the environment)
    """

    def __init__(
        self,
        session_maker: async_sessionmaker,
        key: str = CREDENTIAL_STORAGE_KEY,
        default: Optional[str] = None,
    ):
        self.session_maker = session_maker
        self.key = key
        self.default = (default or "").strip() or None
        self._value: Optional[str] = None

    @property
    def api_key(self) -> Optional[str]:
        return self._value or self.default

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def load(self) -> Optional[str]:
        """Read the stored credential into memory."""
        async with self.session_maker() as db:
            self._value = await crud.get_setting(db, self.key)
        if self.api_key:
            logger.info("🔑 API key loaded, remote provider active")
        else:
            logger.info("🎭 No API key configured, using mock provider")
        return self.api_key

    async def save(self, value: Optional[str]) -> Optional[str]:
        """
        Persist a new credential. Blank values remove the stored one.

        Returns:
            The effective credential after the update
        """
        cleaned = (value or "").strip()
        async with self.session_maker() as db:
            if cleaned:
                await crud.set_setting(db, self.key, cleaned)
            else:
                await crud.delete_setting(db, self.key)
        self._value = cleaned or None
        logger.info("🔑 API key saved" if cleaned else "🔑 API key removed")
        return self.api_key

    async def clear(self) -> None:
        await self.save(None)
