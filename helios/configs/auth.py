"""
Authentication configuration settings.

Bearer token verification parameters. Tokens are issued elsewhere; this
service only verifies them.

Dependencies: pydantic, pydantic_settings
System role: Token verification configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from helios.configs.base import BaseSettings


class AuthSettings(BaseSettings):
    """JWT verification configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="JWT_",
        case_sensitive=False,
        extra="ignore",
    )

    secret: str = Field(default="dev-secret-change-me", description="HMAC secret for token signatures")
    algorithm: str = Field(default="HS256", description="JWT signing algorithm")
