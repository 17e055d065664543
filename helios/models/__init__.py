"""API request and response schemas."""

from helios.models.common import ErrorResponse
from helios.models.session import (
    AttachmentResponse,
    CreateSessionRequest,
    RenameSessionRequest,
    SessionResponse,
    SessionSummaryResponse,
    TurnResponse,
)

__all__ = [
    "AttachmentResponse",
    "CreateSessionRequest",
    "ErrorResponse",
    "RenameSessionRequest",
    "SessionResponse",
    "SessionSummaryResponse",
    "TurnResponse",
]
