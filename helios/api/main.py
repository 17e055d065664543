"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers, error handlers and
observability middleware, and configures the uvicorn server.

Dependencies: fastapi, helios.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from helios import __version__
from helios.api.deps.dependencies import get_service_cache
from helios.application.services import drain_running_exchanges
from helios.boundary.db import get_async_engine, get_async_session_factory
from helios.configs import get_settings
from helios.observability import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
    configure_logging,
)
from .routers import chat_router, health_router, sessions_router

API_PREFIX = "/api/v1"
SERVICE_NAME = "Helios Chat API"
EXCHANGE_SHUTDOWN_TIMEOUT = 10.0


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    configure_logging(settings.effective_log_level)
    logger = logging.getLogger("uvicorn")

    # Startup
    get_async_session_factory()
    cache = get_service_cache()
    _ = cache.title_synthesizer
    if cache.provider_client.configured:
        logger.info("Provider client ready")
    else:
        logger.warning("GEMINI_API_KEY is not set; chat requests will return 502")

    yield

    # Shutdown
    await drain_running_exchanges(EXCHANGE_SHUTDOWN_TIMEOUT)
    cache.clear()
    await get_async_engine().dispose()
    logger.info("Service cache cleared, database engine disposed")


def _endpoint_map() -> dict:
    return {
        "health": f"{API_PREFIX}/health",
        "sessions": f"{API_PREFIX}/sessions",
        "messages": f"{API_PREFIX}/sessions/{{id}}/messages",
        "docs": "/docs",
    }


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Render HTTP errors as flat JSON bodies.

    Structured details raised by the routers are returned as-is; a 404 that
    did not come from a router means no route matched.
    """
    if isinstance(exc.detail, dict):
        body = exc.detail
    elif exc.status_code == status.HTTP_404_NOT_FOUND:
        body = {
            "error": "Not Found",
            "path": request.url.path,
            "method": request.method,
            "message": f"Route {request.method} {request.url.path} does not exist",
        }
    else:
        body = {"message": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    app = FastAPI(
        debug=settings.debug,
        title=SERVICE_NAME,
        description="Conversational sessions with streamed Gemini responses",
        version=__version__,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Correlation-ID"],
    )

    # Add observability middleware (correlation is outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(sessions_router, prefix=API_PREFIX)
    app.include_router(chat_router, prefix=API_PREFIX)

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Service banner."""
        return {
            "name": SERVICE_NAME,
            "version": __version__,
            "status": "running",
            "endpoints": _endpoint_map(),
        }

    @app.get("/api", include_in_schema=False)
    async def api_info() -> dict:
        """API version and endpoint map."""
        return {
            "name": SERVICE_NAME,
            "version": __version__,
            "currentVersion": "v1",
            "endpoints": _endpoint_map(),
        }

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "helios.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
