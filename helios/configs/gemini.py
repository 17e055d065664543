"""
Generative provider configuration settings.

Holds the Gemini credential, the model allow-list, the title model and the
process-wide system instruction handed to every streaming call.

Dependencies: pydantic, pydantic_settings
System role: Provider configuration for the chat pipeline
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from helios.configs.base import BaseSettings
from helios.core.prompts import DEFAULT_SYSTEM_INSTRUCTION


class GeminiSettings(BaseSettings):
    """Google Gemini provider configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GEMINI_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(default=None, description="Gemini API key")
    default_model: str = Field(
        default="gemini-2.5-flash",
        description="Model assigned to new sessions when none is requested",
    )
    allowed_models: list[str] = Field(
        default_factory=lambda: ["gemini-2.5-flash", "gemini-2.5-pro"],
        description="Models a session may select",
    )
    title_model: str = Field(
        default="gemini-2.5-flash",
        description="Model used for session title synthesis",
    )
    system_instruction: str = Field(
        default=DEFAULT_SYSTEM_INSTRUCTION,
        description="Static behavioral prompt sent with every chat request",
    )
    default_title: str = Field(default="New Chat", description="Title of a freshly created session")
    fallback_title: str = Field(
        default="Untitled Chat",
        description="Title used when title synthesis fails",
    )
