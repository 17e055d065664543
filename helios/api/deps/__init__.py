"""FastAPI dependency factories."""

from helios.api.deps.dependencies import (
    ServiceCache,
    get_chat_service,
    get_service_cache,
    get_session_service,
    get_settings_dependency,
)

__all__ = [
    "ServiceCache",
    "get_chat_service",
    "get_service_cache",
    "get_session_service",
    "get_settings_dependency",
]
