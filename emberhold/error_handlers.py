"""
Exception handlers for the Emberhold HTTP surface.

User-correctable registration failures become 400 responses carrying their
field errors. Storage outages become 503. Invariant violations and anything
unexpected become a generic 500 without internal detail.
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from .error_types import ErrorMessages, ErrorSeverity, ErrorType, create_standard_error_response
from .exceptions import (
    DatabaseError,
    EmberholdError,
    InvariantViolationError,
    RegistrationError,
    handle_exception,
)
from .structured_logging.enhanced_logging_config import get_logger
from .utils.error_logging import create_context_from_request

logger = get_logger(__name__)


def register_error_handlers(app: FastAPI, include_details: bool = False) -> None:
    """
    Register exception handlers on the application.

    Args:
        app: FastAPI application instance
        include_details: Include technical messages in 5xx bodies (never in production)
    """

    @app.exception_handler(RegistrationError)
    async def registration_error_handler(request: Request, exc: RegistrationError):
        """Field-keyed errors the client can correct and resubmit."""
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(DatabaseError)
    async def database_error_handler(request: Request, exc: DatabaseError):
        """Handle storage failures outside the atomic create."""
        return JSONResponse(
            status_code=503,
            content=create_standard_error_response(
                ErrorType.DATABASE_ERROR,
                exc.message if include_details else ErrorMessages.SYSTEM_UNAVAILABLE,
                user_friendly=ErrorMessages.SYSTEM_UNAVAILABLE,
                severity=ErrorSeverity.HIGH,
            ),
        )

    @app.exception_handler(InvariantViolationError)
    async def invariant_violation_handler(request: Request, exc: InvariantViolationError):
        """A defect, not bad input: log loudly, answer generically."""
        logger.critical("Invariant violation", message=exc.message, path=request.url.path)
        return _internal_error(exc.message if include_details else None)

    @app.exception_handler(EmberholdError)
    async def emberhold_error_handler(request: Request, exc: EmberholdError):
        """Handle any other service error."""
        return _internal_error(exc.message if include_details else None)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle FastAPI HTTPException."""
        return JSONResponse(
            status_code=exc.status_code,
            content=create_standard_error_response(ErrorType.INVALID_INPUT, str(exc.detail)),
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Handle all other exceptions."""
        error = handle_exception(exc, create_context_from_request(request))
        return _internal_error(error.message if include_details else None)

    logger.info("Error handlers registered for FastAPI application", include_details=include_details)


def _internal_error(message: str | None) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content=create_standard_error_response(
            ErrorType.INTERNAL_ERROR,
            message or ErrorMessages.INTERNAL_ERROR,
            user_friendly=ErrorMessages.INTERNAL_ERROR,
            severity=ErrorSeverity.CRITICAL,
        ),
    )
