"""
Error logging utilities for the Emberhold account service.

This module provides standardized error logging functions that ensure consistent
error handling and logging across the codebase.
"""

import traceback
from typing import Any

from fastapi import Request

from ..exceptions import (
    EmberholdError,
    ErrorContext,
    create_error_context,
)
from ..structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


def log_and_raise(
    exception_class: type[EmberholdError],
    message: str,
    context: ErrorContext | None = None,
    details: dict[str, Any] | None = None,
    user_friendly: str | None = None,
    logger_name: str | None = None,
) -> None:
    """
    Log an error and raise an Emberhold exception.

    Args:
        exception_class: The Emberhold exception class to raise
        message: Technical error message
        context: Error context information
        details: Additional error details
        user_friendly: User-friendly error message
        logger_name: Specific logger name to use (defaults to current module)

    Raises:
        The specified Emberhold exception
    """
    error_logger = get_logger(logger_name) if logger_name else logger

    if context is None:
        context = create_error_context()

    error_logger.error(
        f"Error logged and exception raised: {message}",
        error_type=exception_class.__name__,
        details=details or {},
        user_friendly=user_friendly,
    )

    raise exception_class(
        message=message,
        context=context,
        details=details,
        user_friendly=user_friendly,
    )


def create_context_from_request(request: Request | None) -> ErrorContext:
    """
    Create error context from a FastAPI request.

    Args:
        request: FastAPI request object (can be None for testing)

    Returns:
        ErrorContext with request information
    """
    if request is None:
        metadata = {
            "path": "unknown",
            "method": "unknown",
            "user_agent": "",
            "remote_addr": "",
        }
    else:
        metadata = {
            "path": str(request.url.path),
            "method": request.method,
            "user_agent": request.headers.get("user-agent", ""),
            "remote_addr": getattr(request.client, "host", "") if request.client else "",
        }

    return create_error_context(
        request_id=request.headers.get("x-request-id") if request else None,
        metadata=metadata,
    )


def log_error_with_context(
    error: Exception,
    context: ErrorContext | None = None,
    logger_name: str | None = None,
    level: str = "error",
) -> None:
    """
    Log an error with structured context information.

    Args:
        error: The exception to log
        context: Error context information
        logger_name: Specific logger name to use (defaults to current module)
        level: Log level (debug, info, warning, error, critical)
    """
    error_logger = get_logger(logger_name) if logger_name else logger

    if context is None:
        context = create_error_context()

    log_method = getattr(error_logger, level.lower(), error_logger.error)
    log_method(
        "Error logged with context",
        error_type=error.__class__.__name__,
        error_message=str(error),
        context=context.to_dict(),
        traceback=traceback.format_exc(),
    )
