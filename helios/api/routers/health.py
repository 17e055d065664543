"""
Health check API endpoints.

Routes: GET /health, GET /health/db

Dependencies: sqlalchemy, helios.boundary
System role: Health check HTTP API
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from helios.boundary.db import get_async_db

logger = logging.getLogger(__name__)

_started_at = time.monotonic()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
    timestamp: datetime
    uptime: float


router = APIRouter(prefix="/health", tags=["health"])


def _health(message: str) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        message=message,
        timestamp=datetime.now(timezone.utc),
        uptime=round(time.monotonic() - _started_at, 3),
    )


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic liveness check with process uptime in seconds."""
    return _health("Server Healthy")


@router.get("/db", response_model=HealthResponse)
async def health_check_db(db: AsyncSession = Depends(get_async_db)) -> HealthResponse:
    """Database health check."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"{__name__}:health_check_db - {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"message": "Database unavailable", "error": type(e).__name__},
        )
    return _health("Database connection OK")
