"""Core app configuration, database, security and session handling."""

from poseidon.core.config import get_settings, settings
from poseidon.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
