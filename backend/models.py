from datetime import datetime, timezone

from database import Base
from sqlalchemy import Column, DateTime, String, Text


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AppSetting(Base):
    """Local key-value store; currently only holds the optional API credential."""

    __tablename__ = "app_settings"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)
