"""
Exception hierarchy for the Emberhold account service.

Two failure classes are kept apart: user-correctable errors
(RegistrationError and its subclasses, rendered as 400 responses with field
messages) and programming-error guards (InvariantViolationError, rendered as
a generic 500).
"""

import traceback
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)

ErrorReport = dict[str, list[str]]


@dataclass
class ErrorContext:
    """Contextual information for error reporting and debugging."""

    user_id: str | None = None
    session_id: str | None = None
    request_id: str | None = None
    timestamp: datetime = field(default_factory=datetime.now)
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for logging."""
        return {
            "user_id": self.user_id,
            "session_id": self.session_id,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
        }


class EmberholdError(Exception):
    """
    Base exception for all Emberhold errors.

    Provides structured error handling with context and metadata
    for proper error categorization and debugging.
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        details: dict[str, Any] | None = None,
        user_friendly: str | None = None,
    ):
        """
        Initialize Emberhold error.

        Args:
            message: Technical error message
            context: Error context information
            details: Additional error details
            user_friendly: User-friendly error message
        """
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()
        self.details = details or {}
        self.user_friendly = user_friendly or message
        self.timestamp = datetime.now()

        self._log_error()

    def _log_error(self):
        """Log the error with structured context."""
        logger.error(
            "Emberhold error occurred",
            error_type=self.__class__.__name__,
            message=self.message,
            context=self.context.to_dict(),
            details=self.details,
            timestamp=self.timestamp.isoformat(),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "user_friendly": self.user_friendly,
            "context": self.context.to_dict(),
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class AuthenticationError(EmberholdError):
    """Authentication and credential hashing errors."""

    def __init__(self, message: str, context: ErrorContext | None = None, auth_type: str = "unknown", **kwargs):
        super().__init__(message, context, **kwargs)
        self.auth_type = auth_type
        self.details["auth_type"] = auth_type


class DatabaseError(EmberholdError):
    """Database operation errors."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        operation: str = "unknown",
        table: str | None = None,
        **kwargs,
    ):
        super().__init__(message, context, **kwargs)
        self.operation = operation
        self.table = table
        self.details["operation"] = operation
        if table:
            self.details["table"] = table


class ValidationError(EmberholdError):
    """Data validation errors raised outside the form validation engine."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        field: str | None = None,
        value: Any | None = None,
        **kwargs,
    ):
        super().__init__(message, context, **kwargs)
        self.field = field
        self.value = value
        if field:
            self.details["field"] = field
        if value is not None:
            self.details["value"] = str(value)


class NetworkError(EmberholdError):
    """Network and outbound communication errors."""

    def __init__(self, message: str, context: ErrorContext | None = None, connection_type: str = "unknown", **kwargs):
        super().__init__(message, context, **kwargs)
        self.connection_type = connection_type
        self.details["connection_type"] = connection_type


class InvariantViolationError(EmberholdError):
    """
    A contract between the validation engine and its callers was broken.

    Raised when a value that validation should already have narrowed is
    missing or has the wrong type. Signals a defect, never bad input.
    """


def invariant(condition: Any, message: str) -> None:
    """Raise InvariantViolationError when condition is falsy."""
    if not condition:
        raise InvariantViolationError(f"Invariant failed: {message}")


class RegistrationError(EmberholdError):
    """
    Base class for user-recoverable registration failures.

    Carries the field-keyed error mapping rendered back to the client.
    """

    status_code = 400
    field_name = "global"

    def __init__(self, message: str, context: ErrorContext | None = None, **kwargs):
        super().__init__(message, context, **kwargs)

    def _log_error(self):
        logger.info(
            "Registration rejected",
            error_type=self.__class__.__name__,
            message=self.message,
            context=self.context.to_dict(),
        )

    @property
    def errors(self) -> ErrorReport:
        return {self.field_name: [self.message]}

    def to_response(self) -> dict[str, Any]:
        """Body returned to the presentation layer."""
        return {"errors": self.errors}


class RegistrationValidationFailed(RegistrationError):
    """The validation engine produced a non-empty error report."""

    def __init__(self, report: ErrorReport, context: ErrorContext | None = None):
        self.report = report
        super().__init__("Registration form is invalid", context, details={"fields": sorted(report)})

    @property
    def errors(self) -> ErrorReport:
        return self.report

    def to_response(self) -> dict[str, Any]:
        return {"invalid": True, "errors": self.errors}


class EmailTakenError(RegistrationError):
    """An account already uses the submitted email."""

    field_name = "email"

    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Email is already taken", context)


class CharacterNameTakenError(RegistrationError):
    """A character already uses the submitted name."""

    field_name = "characterName"

    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Character name is already taken", context)


class PersistenceFailedError(RegistrationError):
    """The atomic account creation did not produce an account and its verification token."""

    def __init__(self, context: ErrorContext | None = None, **kwargs):
        super().__init__("Failed to create account", context, **kwargs)

    def _log_error(self):
        logger.error(
            "Account creation failed",
            error_type=self.__class__.__name__,
            context=self.context.to_dict(),
            details=self.details,
        )


def create_error_context(**kwargs) -> ErrorContext:
    """
    Create an error context with the given parameters.

    Args:
        **kwargs: Context parameters

    Returns:
        ErrorContext object
    """
    return ErrorContext(**kwargs)


def handle_exception(exc: Exception, context: ErrorContext | None = None) -> EmberholdError:
    """
    Convert a generic exception to an Emberhold error.

    Args:
        exc: The original exception
        context: Error context

    Returns:
        EmberholdError instance
    """
    if isinstance(exc, EmberholdError):
        return exc

    if isinstance(exc, ValueError | TypeError):
        return ValidationError(str(exc), context, details={"original_type": type(exc).__name__})
    if isinstance(exc, ConnectionError | TimeoutError):
        return NetworkError(str(exc), context, details={"original_type": type(exc).__name__})
    return EmberholdError(
        str(exc), context, details={"original_type": type(exc).__name__, "traceback": traceback.format_exc()}
    )
