"""
Check-in service settings.

Extends the base settings with the administrative database credential and
day-boundary configuration.
"""

from typing import Optional
from common.config import BaseAppSettings


class Settings(BaseAppSettings):
    """Check-in service settings."""

    # ==========================================================================
    # Administrative Database
    # ==========================================================================
    # Elevated credential used for daily entries and the dashboard cache.
    # Falls back to the user-scoped connection when unset.
    ADMIN_MONGODB_URI: Optional[str] = None
    ADMIN_MONGODB_DATABASE: Optional[str] = None

    # ==========================================================================
    # Check-in Settings
    # ==========================================================================
    # Day boundary for users whose profile has no timezone
    DEFAULT_TIMEZONE: str = "UTC"

    # Create unique indexes and range validators on startup
    ENSURE_COLLECTIONS_ON_STARTUP: bool = True

    def get_admin_uri(self) -> str:
        """Get admin MongoDB URI, falling back to main URI if not set."""
        return self.ADMIN_MONGODB_URI or self.MONGODB_URI

    def get_admin_database(self) -> str:
        """Get admin database name, falling back to main database if not set."""
        return self.ADMIN_MONGODB_DATABASE or self.MONGODB_DATABASE


# Global settings instance
settings = Settings()
