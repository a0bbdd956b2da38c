"""Core app configuration and database."""

from forum.core.config import get_settings, settings
from forum.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
