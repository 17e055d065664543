"""
Exception hierarchy for the Helios chat backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class HeliosException(Exception):
    """Base exception for all Helios application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(HeliosException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class AttachmentTooLargeError(ValidationError):
    """Raised when an uploaded attachment exceeds the configured size limit."""

    def __init__(self, file_name: str, size: int, limit: int) -> None:
        super().__init__(
            f"Attachment '{file_name}' exceeds the {limit} byte limit",
            field="attachments",
            details={"file_name": file_name, "size": size, "limit": limit},
        )


class SessionNotFoundError(HeliosException):
    """Raised when a session cannot be found or is not owned by the caller."""

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize session not found error.

        Args:
            session_id: ID of the missing session
            details: Additional context
        """
        details = details or {}
        details["session_id"] = session_id
        super().__init__(
            "Session not found or you do not have permission to access it.",
            details,
        )


class ProviderError(HeliosException):
    """Raised when the generative provider rejects a call or the transport fails."""

    def __init__(
        self,
        message: str,
        model: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize provider error.

        Args:
            message: Error message
            model: Model identifier used for the failed call
            details: Additional context
        """
        details = details or {}
        if model:
            details["model"] = model
        super().__init__(message, details)


class PersistenceError(HeliosException):
    """Raised when the session store fails to commit an exchange."""

    def __init__(
        self,
        message: str,
        session_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if session_id:
            details["session_id"] = session_id
        super().__init__(message, details)


class StreamInterruptedError(HeliosException):
    """Raised on the response channel when an exchange fails after bytes were sent."""

    pass


class UnsupportedModelError(ValidationError):
    """Raised when a session requests a model outside the allow-list."""

    def __init__(self, model: str, allowed: list[str]) -> None:
        super().__init__(
            f"Unsupported model '{model}'",
            field="model",
            details={"allowed_models": list(allowed)},
        )
