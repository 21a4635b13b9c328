"""
Centralized error types and constants for the Emberhold account service.

This module defines standardized error types and constants to ensure
consistent error responses across all application layers.
"""

from enum import Enum
from typing import Any


class ErrorType(Enum):
    """Standardized error types for consistent categorization."""

    # Validation Errors
    INVALID_INPUT = "invalid_input"

    # Database Errors
    DATABASE_ERROR = "database_error"

    # System
    INTERNAL_ERROR = "internal_error"


class ErrorSeverity(Enum):
    """Error severity levels for logging and handling."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


def create_standard_error_response(
    error_type: ErrorType,
    message: str,
    user_friendly: str | None = None,
    details: dict[str, Any] | None = None,
    severity: ErrorSeverity = ErrorSeverity.MEDIUM,
) -> dict[str, Any]:
    """
    Create a standardized error response.

    Args:
        error_type: The type of error
        message: Technical error message
        user_friendly: User-friendly error message (optional)
        details: Additional error details (optional)
        severity: Error severity level (optional)

    Returns:
        Standardized error response dictionary
    """
    from datetime import UTC, datetime

    return {
        "error": {
            "type": error_type.value,
            "message": message,
            "user_friendly": user_friendly or message,
            "details": details or {},
            "severity": severity.value,
            "timestamp": datetime.now(UTC).isoformat(),
        }
    }


class ErrorMessages:
    """Common error messages for consistent user experience."""

    INTERNAL_ERROR = "An internal error occurred"
    SYSTEM_UNAVAILABLE = "System temporarily unavailable"
