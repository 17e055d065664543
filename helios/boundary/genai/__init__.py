"""Generative provider boundary."""

from helios.boundary.genai.gemini_client import GeminiProviderClient, ProviderClient

__all__ = ["GeminiProviderClient", "ProviderClient"]
