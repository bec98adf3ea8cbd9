"""
Core application infrastructure: settings, logging and the app factory.
"""

from .logging_config import get_logger, setup_logging
from .settings import Settings, get_settings, reset_settings

__all__ = [
    "Settings",
    "get_logger",
    "get_settings",
    "reset_settings",
    "setup_logging",
]
