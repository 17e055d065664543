"""
Title synthesizer.

Best-effort secondary provider call that labels a session from its first
prompt. Never raises: every failure collapses to the configured fallback title.

Dependencies: helios.boundary.genai, helios.configs, helios.core.prompts
System role: Session title generation
"""

import logging

from helios.boundary.db.models.chat_session_model import TITLE_MAX_LENGTH
from helios.boundary.genai import ProviderClient
from helios.configs.gemini import GeminiSettings
from helios.core.prompts import build_title_prompt

logger = logging.getLogger(__name__)


class TitleSynthesizer:
    """Generates short session titles with a non-streaming provider call."""

    def __init__(self, provider: ProviderClient, config: GeminiSettings) -> None:
        """
        Initialize title synthesizer.

        Args:
            provider: Generative provider client
            config: Provider settings (title model, fallback title)
        """
        self.provider = provider
        self.config = config

    async def synthesize(self, prompt: str) -> str:
        """
        Produce a title of at most four words for a prompt.

        Args:
            prompt: First user prompt of the session

        Returns:
            str: Trimmed provider output cut to the stored title length, or
            the fallback title on empty prompt, empty result, or any provider
            failure
        """
        if not prompt.strip():
            return self.config.fallback_title

        try:
            text = await self.provider.generate_text(
                build_title_prompt(prompt),
                model=self.config.title_model,
            )
        except Exception as e:
            logger.warning(
                "Title generation failed",
                extra={"error_type": type(e).__name__, "error_msg": str(e)},
            )
            return self.config.fallback_title

        title = text.strip()
        if not title:
            logger.warning("Title generation returned empty text")
            return self.config.fallback_title
        if len(title) > TITLE_MAX_LENGTH:
            logger.warning(
                "Title generation returned an overlong title",
                extra={"title_len": len(title)},
            )
            title = title[:TITLE_MAX_LENGTH].rstrip()
        return title
