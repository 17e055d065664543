"""
Base configuration settings.

Every Helios settings class reads the process environment and an optional
``.env`` file through this base. The service-wide switches live here too.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Shared settings source plus the service-wide runtime switches."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = Field(
        default=False,
        description="Run FastAPI in debug mode and log at DEBUG regardless of log_level",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level for the API process (DEBUG, INFO, WARNING, ERROR)",
    )

    @property
    def effective_log_level(self) -> str:
        """Log level after applying the debug switch."""
        return "DEBUG" if self.debug else self.log_level.upper()
