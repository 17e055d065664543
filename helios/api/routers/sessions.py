"""
Session API endpoints.

Routes:
- POST /sessions - Create new session
- GET /sessions - List the caller's sessions
- GET /sessions/{id} - Get session with turns
- PUT /sessions/{id} - Rename session
- DELETE /sessions/{id} - Delete session

Dependencies: helios.application.services.session_service, helios.models
System role: Session management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from helios.api.deps import get_session_service
from helios.api.routers.router_utils import handle_session_errors
from helios.api.security import get_current_owner
from helios.application.services.session_service import SessionService
from helios.models.common import ErrorResponse
from helios.models.session import (
    CreateSessionRequest,
    RenameSessionRequest,
    SessionResponse,
    SessionSummaryResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/sessions",
    tags=["sessions"],
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
@handle_session_errors
async def create_session(
    request: CreateSessionRequest | None = None,
    owner: str = Depends(get_current_owner),
    session_service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    """
    Create an empty session titled "New Chat".

    Args:
        request: Optional body selecting the model
        owner: Authenticated owner id
        session_service: Injected SessionService

    Returns:
        SessionResponse: Created session

    Raises:
        HTTPException(422): Model not in the allow-list
    """
    model = request.model if request else None
    record = await session_service.create_session(owner, model=model)
    return SessionResponse.from_model(record)


@router.get("", response_model=list[SessionSummaryResponse])
@handle_session_errors
async def list_sessions(
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    owner: str = Depends(get_current_owner),
    session_service: SessionService = Depends(get_session_service),
) -> list[SessionSummaryResponse]:
    """List the caller's sessions without turns, most recently updated first."""
    records = await session_service.list_sessions(owner, limit=limit, offset=offset)
    return [SessionSummaryResponse.from_model(r) for r in records]


@router.get("/{session_id}", response_model=SessionResponse)
@handle_session_errors
async def get_session(
    session_id: UUID,
    owner: str = Depends(get_current_owner),
    session_service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    """
    Get a session with its full turn history.

    Raises:
        HTTPException(404): Session not found for this owner
    """
    record = await session_service.get_session(session_id, owner)
    return SessionResponse.from_model(record)


@router.put("/{session_id}", response_model=SessionResponse)
@handle_session_errors
async def rename_session(
    session_id: UUID,
    request: RenameSessionRequest,
    owner: str = Depends(get_current_owner),
    session_service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    """
    Rename a session.

    Raises:
        HTTPException(400): Blank title
        HTTPException(404): Session not found for this owner
    """
    record = await session_service.rename_session(session_id, owner, request.title)
    return SessionResponse.from_model(record)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_session_errors
async def delete_session(
    session_id: UUID,
    owner: str = Depends(get_current_owner),
    session_service: SessionService = Depends(get_session_service),
) -> None:
    """
    Delete a session by ID.

    Raises:
        HTTPException(404): Session not found for this owner
    """
    await session_service.delete_session(session_id, owner)
