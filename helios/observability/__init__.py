"""
Observability module.

Provides logging configuration, correlation ID tracking and request
logging middleware.
"""

from helios.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from helios.observability.logger import configure_logging
from helios.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

__all__ = [
    "CorrelationMiddleware",
    "RequestLoggingMiddleware",
    "clear_correlation_id",
    "configure_logging",
    "get_correlation_id",
    "set_correlation_id",
]
