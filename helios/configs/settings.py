"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from helios.configs.auth import AuthSettings
from helios.configs.base import BaseSettings
from helios.configs.database import DatabaseSettings
from helios.configs.gemini import GeminiSettings
from helios.configs.uploads import UploadSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    database: DatabaseSettings = DatabaseSettings()
    gemini: GeminiSettings = GeminiSettings()
    auth: AuthSettings = AuthSettings()
    uploads: UploadSettings = UploadSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from helios.configs import get_settings
        settings = get_settings()
    """
    return Settings()
