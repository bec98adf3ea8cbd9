"""API routers."""

from . import roundtable, settings

__all__ = ["roundtable", "settings"]
