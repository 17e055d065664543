"""
Gemini provider client.

Wraps the google-genai async client behind two calls: a lazy streaming call
that yields text fragments, and a single-shot text completion. Transport and
provider failures surface as ProviderError.

Dependencies: google.genai, helios.core.conversation, helios.core.exceptions
System role: Generative Provider Client boundary
"""

import logging
from collections.abc import AsyncIterator, Sequence
from typing import Protocol

from google import genai
from google.genai import types

from helios.core.conversation import ContentBlock, InlineDataPart, Part, TextPart
from helios.core.exceptions import ProviderError

logger = logging.getLogger(__name__)


class ProviderClient(Protocol):
    """Interface consumed by the chat orchestrator and title synthesizer."""

    def stream_content(
        self,
        contents: Sequence[ContentBlock],
        model: str,
        system_instruction: str,
    ) -> AsyncIterator[str]: ...

    async def generate_text(self, prompt: str, model: str) -> str: ...


def to_genai_part(part: Part) -> types.Part:
    """Convert a domain part to a google-genai Part."""
    if isinstance(part, InlineDataPart):
        return types.Part.from_bytes(data=part.data, mime_type=part.mime_type)
    if isinstance(part, TextPart):
        return types.Part.from_text(text=part.text)
    raise TypeError(f"Unsupported content part: {type(part).__name__}")


def to_genai_content(block: ContentBlock) -> types.Content:
    """Convert a domain content block to a google-genai Content."""
    return types.Content(role=block.role, parts=[to_genai_part(p) for p in block.parts])


class GeminiProviderClient:
    """Async Gemini client used for chat streaming and title generation."""

    def __init__(self, api_key: str | None = None, client: genai.Client | None = None) -> None:
        """
        Initialize the provider client.

        Args:
            api_key: Gemini API key (ignored when ``client`` is given)
            client: Pre-built google-genai client

        Without either, the client is unconfigured and every call raises
        ProviderError, so a missing key is reported per request.
        """
        if client is None and api_key:
            client = genai.Client(api_key=api_key)
        self._client = client

    @property
    def configured(self) -> bool:
        """True when a google-genai client is available."""
        return self._client is not None

    def _require_client(self, model: str) -> genai.Client:
        if self._client is None:
            logger.error(f"{__name__} - GEMINI_API_KEY is not set, provider call refused")
            raise ProviderError("GEMINI_API_KEY is not configured", model=model)
        return self._client

    async def stream_content(
        self,
        contents: Sequence[ContentBlock],
        model: str,
        system_instruction: str,
    ) -> AsyncIterator[str]:
        """
        Stream a completion as text fragments.

        The request is only sent when the first fragment is pulled. Empty
        fragments are passed through as empty strings.

        Args:
            contents: Assembled conversation blocks
            model: Gemini model identifier
            system_instruction: Static behavioral prompt

        Yields:
            str: Text fragments in emission order

        Raises:
            ProviderError: If no key is configured, the call is rejected, or
                the stream breaks
        """
        logger.info(
            f"{__name__}:stream_content - START model={model} blocks={len(contents)}"
        )
        client = self._require_client(model)
        try:
            stream = await client.aio.models.generate_content_stream(
                model=model,
                contents=[to_genai_content(block) for block in contents],
                config=types.GenerateContentConfig(system_instruction=system_instruction),
            )
        except Exception as e:
            logger.error(
                f"{__name__}:stream_content - FAILED opening stream - {type(e).__name__}: {e}"
            )
            raise ProviderError(f"Failed to open provider stream: {e}", model=model) from e

        fragment_count = 0
        try:
            async for chunk in stream:
                fragment_count += 1
                yield chunk.text or ""
        except Exception as e:
            logger.error(
                f"{__name__}:stream_content - FAILED after {fragment_count} fragments - "
                f"{type(e).__name__}: {e}"
            )
            raise ProviderError(f"Provider stream interrupted: {e}", model=model) from e

        logger.info(f"{__name__}:stream_content - END fragments={fragment_count}")

    async def generate_text(self, prompt: str, model: str) -> str:
        """
        Request a single non-streaming completion.

        Args:
            prompt: Text prompt
            model: Gemini model identifier

        Returns:
            str: Response text (empty string if the provider returned none)

        Raises:
            ProviderError: If no key is configured or the call fails
        """
        client = self._require_client(model)
        try:
            response = await client.aio.models.generate_content(
                model=model,
                contents=prompt,
            )
        except Exception as e:
            logger.error(
                f"{__name__}:generate_text - FAILED - {type(e).__name__}: {e}"
            )
            raise ProviderError(f"Provider completion failed: {e}", model=model) from e
        return response.text or ""
