"""
Test suite for GeminiProviderClient.

Uses a mocked google-genai client; no network access.

System role: Verification of the provider boundary
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from google.genai import types

from helios.boundary.genai.gemini_client import (
    GeminiProviderClient,
    to_genai_content,
    to_genai_part,
)
from helios.core.conversation import InlineDataPart, ModelBlock, TextPart, UserBlock
from helios.core.exceptions import ProviderError


async def _chunks(*texts, error: Exception | None = None):
    for text in texts:
        yield SimpleNamespace(text=text)
    if error is not None:
        raise error


@pytest.fixture
def genai_client() -> MagicMock:
    """Provide a mocked google-genai client."""
    client = MagicMock()
    client.aio.models.generate_content_stream = AsyncMock()
    client.aio.models.generate_content = AsyncMock()
    return client


class TestConversion:
    """Test suite for domain to google-genai conversion."""

    def test_text_part_should_convert_to_text(self) -> None:
        """Test text parts keep their text."""
        part = to_genai_part(TextPart(text="hello"))

        assert part.text == "hello"

    def test_inline_part_should_convert_to_inline_data(self) -> None:
        """Test inline parts carry bytes and MIME type."""
        # Act
        part = to_genai_part(InlineDataPart(data=b"\x00\x01", mime_type="image/png"))

        # Assert
        assert part.inline_data.data == b"\x00\x01"
        assert part.inline_data.mime_type == "image/png"

    def test_blocks_should_keep_role(self) -> None:
        """Test user and model roles map through."""
        user = to_genai_content(UserBlock(parts=(TextPart(text="q"),)))
        model = to_genai_content(ModelBlock(parts=(TextPart(text="a"),)))

        assert isinstance(user, types.Content)
        assert (user.role, model.role) == ("user", "model")


class TestGeminiProviderClient:
    """Test suite for streaming and single-shot calls."""

    async def test_stream_without_key_should_raise_provider_error(self) -> None:
        """Test a missing credential surfaces on the first pull, not at construction."""
        # Arrange
        provider = GeminiProviderClient()
        stream = provider.stream_content(
            [UserBlock(parts=(TextPart(text="Hello"),))],
            model="gemini-2.5-flash",
            system_instruction="Be brief.",
        )

        # Act & Assert
        assert not provider.configured
        with pytest.raises(ProviderError, match="GEMINI_API_KEY"):
            await stream.__anext__()

    async def test_generate_text_without_key_should_raise_provider_error(self) -> None:
        """Test the title call fails the same way without a credential."""
        with pytest.raises(ProviderError):
            await GeminiProviderClient(api_key="").generate_text("t", model="gemini-2.5-flash")

    async def test_stream_content_should_yield_chunk_texts(self, genai_client) -> None:
        """Test fragments come through in order, empty chunks as empty strings."""
        # Arrange
        genai_client.aio.models.generate_content_stream.return_value = _chunks("Hi", None, " there!")
        provider = GeminiProviderClient(client=genai_client)

        # Act
        fragments = [
            f
            async for f in provider.stream_content(
                [UserBlock(parts=(TextPart(text="Hello"),))],
                model="gemini-2.5-flash",
                system_instruction="Be brief.",
            )
        ]

        # Assert
        assert fragments == ["Hi", "", " there!"]
        kwargs = genai_client.aio.models.generate_content_stream.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        assert kwargs["config"].system_instruction == "Be brief."
        assert kwargs["contents"][0].role == "user"

    async def test_stream_content_should_not_call_until_iterated(self, genai_client) -> None:
        """Test the request is deferred until the first pull."""
        provider = GeminiProviderClient(client=genai_client)

        provider.stream_content([], model="gemini-2.5-flash", system_instruction="")

        genai_client.aio.models.generate_content_stream.assert_not_called()

    async def test_stream_open_failure_should_raise_provider_error(self, genai_client) -> None:
        """Test a rejected request surfaces as ProviderError."""
        # Arrange
        genai_client.aio.models.generate_content_stream.side_effect = RuntimeError("403")
        provider = GeminiProviderClient(client=genai_client)

        # Act & Assert
        with pytest.raises(ProviderError):
            async for _ in provider.stream_content([], model="gemini-2.5-flash", system_instruction=""):
                pass

    async def test_stream_interruption_should_raise_provider_error(self, genai_client) -> None:
        """Test a broken stream surfaces as ProviderError after delivered fragments."""
        # Arrange
        genai_client.aio.models.generate_content_stream.return_value = _chunks(
            "partial", error=ConnectionError("reset")
        )
        provider = GeminiProviderClient(client=genai_client)
        received = []

        # Act & Assert
        with pytest.raises(ProviderError):
            async for fragment in provider.stream_content(
                [], model="gemini-2.5-flash", system_instruction=""
            ):
                received.append(fragment)
        assert received == ["partial"]

    async def test_generate_text_should_return_response_text(self, genai_client) -> None:
        """Test single-shot completions return text."""
        # Arrange
        genai_client.aio.models.generate_content.return_value = SimpleNamespace(text="Title")
        provider = GeminiProviderClient(client=genai_client)

        # Act
        text = await provider.generate_text("prompt", model="gemini-2.5-flash")

        # Assert
        assert text == "Title"

    async def test_generate_text_failure_should_raise_provider_error(self, genai_client) -> None:
        """Test completion errors are wrapped."""
        genai_client.aio.models.generate_content.side_effect = RuntimeError("quota")
        provider = GeminiProviderClient(client=genai_client)

        with pytest.raises(ProviderError):
            await provider.generate_text("prompt", model="gemini-2.5-flash")
