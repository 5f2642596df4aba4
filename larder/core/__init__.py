"""Core app configuration and database."""

from larder.core.config import get_settings, settings
from larder.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
