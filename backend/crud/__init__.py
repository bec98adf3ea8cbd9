"""
CRUD operations module.

This module provides database operations organized by domain aggregate.
"""

from .settings import delete_setting, get_setting, set_setting

__all__ = [
    "delete_setting",
    "get_setting",
    "set_setting",
]
