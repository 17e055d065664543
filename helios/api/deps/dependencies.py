"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: helios.configs, helios.application, helios.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from helios.application.services import ChatService, SessionService, TitleSynthesizer
from helios.boundary.db import get_async_db, get_async_session_factory
from helios.boundary.genai import GeminiProviderClient
from helios.configs import Settings, get_settings
from helios.core.session_locks import SessionLockRegistry


class ServiceCache:
    """Container for process-wide service instances."""

    def __init__(self):
        self._provider_client = None
        self._title_synthesizer = None
        self._session_locks = None

    @property
    def provider_client(self) -> GeminiProviderClient:
        """Get cached Gemini provider client."""
        if self._provider_client is None:
            settings = get_settings()
            self._provider_client = GeminiProviderClient(api_key=settings.gemini.api_key)
        return self._provider_client

    @property
    def title_synthesizer(self) -> TitleSynthesizer:
        """Get cached title synthesizer."""
        if self._title_synthesizer is None:
            self._title_synthesizer = TitleSynthesizer(
                provider=self.provider_client,
                config=get_settings().gemini,
            )
        return self._title_synthesizer

    @property
    def session_locks(self) -> SessionLockRegistry:
        """Get the per-session lock registry."""
        if self._session_locks is None:
            self._session_locks = SessionLockRegistry()
        return self._session_locks

    def clear(self) -> None:
        """Clear all cached instances."""
        self._provider_client = None
        self._title_synthesizer = None
        self._session_locks = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_session_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> SessionService:
    """
    Get session service instance.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings

    Returns:
        SessionService: Session service instance
    """
    return SessionService(db=db, config=settings.gemini)


def get_chat_service(
    settings: Settings = Depends(get_settings_dependency),
    cache: ServiceCache = Depends(get_service_cache),
) -> ChatService:
    """
    Get chat service instance.

    The chat service opens its own database sessions because an exchange
    outlives the request that started it.

    Returns:
        ChatService: Streaming orchestrator wired to the cached provider client
    """
    return ChatService(
        session_factory=get_async_session_factory(),
        provider=cache.provider_client,
        title_synthesizer=cache.title_synthesizer,
        config=settings.gemini,
        session_locks=cache.session_locks,
    )
