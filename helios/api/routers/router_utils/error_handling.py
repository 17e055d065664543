"""
Session error handling utilities.

Provides a decorator that maps domain exceptions raised by the session and
chat services to HTTPExceptions with a uniform ``{message, error, details}``
body.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from helios.core.exceptions import (
    AttachmentTooLargeError,
    ProviderError,
    SessionNotFoundError,
    UnsupportedModelError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def _error_detail(message: str, error: str | None = None, details: dict | None = None) -> dict:
    return {"message": message, "error": error, "details": details or None}


def handle_session_errors(func: F) -> F:
    """
    Decorator to handle session and chat errors and transform them into HTTPExceptions.

    This centralizes:
    - Logging of errors with context (session_id, model)
    - Mapping specific exceptions to HTTP status codes
    - Ensuring uniform error response formats
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except AttachmentTooLargeError as e:
            logger.warning("Attachment rejected", extra=e.details)
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=_error_detail(e.message, details=e.details),
            )

        except UnsupportedModelError as e:
            logger.warning("Unsupported model requested", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=_error_detail(e.message, details=e.details),
            )

        except ValidationError as e:
            logger.warning("Invalid request", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=_error_detail(e.message, details=e.details),
            )

        except SessionNotFoundError as e:
            logger.warning("Session not found", extra=e.details)
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=_error_detail(e.message),
            )

        except ProviderError as e:
            logger.exception("Provider call failed", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=_error_detail("Failed to get response from AI", error=e.message),
            )

        except Exception as e:
            logger.exception(
                "Unexpected failure in session operation",
                extra={"error": str(e)},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=_error_detail("Server Error", error=str(e)),
            )

    return wrapper  # type: ignore
