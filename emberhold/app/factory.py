"""
FastAPI application factory for the Emberhold account service.

This module handles FastAPI app creation, middleware configuration,
and router registration.
"""

import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ..api.account import account_router
from ..config import get_config
from ..error_handlers import register_error_handlers
from ..structured_logging.enhanced_logging_config import (
    bind_request_context,
    clear_request_context,
    get_logger,
)
from .lifespan import lifespan

logger = get_logger(__name__)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application instance
    """
    config = get_config()

    app = FastAPI(
        title="Emberhold Account API",
        description="Account registration for the Emberhold game server",
        version="0.1.0",
        lifespan=lifespan,
    )

    logger.info(
        "CORS configuration",
        allow_origins=config.cors.allow_origins,
        allow_credentials=config.cors.allow_credentials,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors.allow_origins,
        allow_credentials=config.cors.allow_credentials,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Accept-Language", "X-Request-ID"],
    )

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """Bind a correlation id to every log entry emitted while handling the request."""
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        bind_request_context(correlation_id=request_id, request_id=request_id, path=request.url.path)
        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_request_context()

    include_details = config.logging.environment != "production"
    register_error_handlers(app, include_details=include_details)

    app.include_router(account_router)

    return app
