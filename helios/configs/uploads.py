"""
Upload configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Attachment size policy
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from helios.configs.base import BaseSettings


class UploadSettings(BaseSettings):
    """Attachment upload limits."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="UPLOAD_",
        case_sensitive=False,
        extra="ignore",
    )

    max_file_size_bytes: int = Field(
        default=15 * 1024 * 1024,
        description="Maximum size of a single attachment (15 MB)",
    )
