"""
CRUD operations for the local key-value settings table.
"""

import logging
from typing import Optional

import models
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger("CRUD")


async def get_setting(db: AsyncSession, key: str) -> Optional[str]:
    """Return the stored value, or None if the key is absent."""
    row = await db.get(models.AppSetting, key)
    return row.value if row is not None else None


async def set_setting(db: AsyncSession, key: str, value: str) -> models.AppSetting:
    """Insert or update a value."""
    row = await db.get(models.AppSetting, key)
    if row is None:
        row = models.AppSetting(key=key, value=value)
        db.add(row)
    else:
        row.value = value
    await db.commit()
    await db.refresh(row)
    return row


async def delete_setting(db: AsyncSession, key: str) -> bool:
    """Remove a key. Returns False if it did not exist."""
    row = await db.get(models.AppSetting, key)
    if row is None:
        return False
    await db.delete(row)
    await db.commit()
    return True
