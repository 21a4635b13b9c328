"""
Enhanced structlog-based logging configuration for the Emberhold account service.

This module provides structured logging with MDC (Mapped Diagnostic Context),
correlation IDs and security sanitization. Every module obtains its logger
through get_logger() and logs an event name with key/value pairs.
"""

import json
import logging
import os
import sys
import uuid
from datetime import UTC, datetime
from typing import Any

import structlog
from structlog.contextvars import (
    bind_contextvars,
    clear_contextvars,
    merge_contextvars,
)
from structlog.stdlib import BoundLogger, LoggerFactory

_LOGGING_INITIALIZED = False
_LOGGING_SIGNATURE: str | None = None

VALID_ENVIRONMENTS = ["local", "unit_test", "e2e_test", "production"]

SENSITIVE_KEYS = [
    "password",
    "token",
    "secret",
    "key",
    "credential",
    "auth",
    "jwt",
    "api_key",
    "private_key",
    "session_token",
    "access_token",
    "refresh_token",
    "bearer",
    "authorization",
]


def detect_environment() -> str:
    """
    Detect the current environment based on various indicators.

    Returns:
        Environment name: "e2e_test", "unit_test", "local", or "production"
    """
    # Check if running under pytest (unit tests)
    if "pytest" in sys.modules or "pytest" in sys.argv[0]:
        return "unit_test"

    env = os.getenv("EMBERHOLD_ENV")
    if env and env in VALID_ENVIRONMENTS:
        return env

    logging_env = os.getenv("LOGGING_ENVIRONMENT", "")
    if logging_env in VALID_ENVIRONMENTS:
        return logging_env

    return "local"


def sanitize_sensitive_data(_logger: Any, _name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Remove sensitive data from log entries.

    Redacts values whose key looks like a password, token or credential so
    that plaintext secrets never reach a log sink.

    Args:
        _logger: Logger instance (unused)
        _name: Logger name (unused)
        event_dict: Event dictionary to sanitize

    Returns:
        Sanitized event dictionary
    """

    def sanitize_dict(d: dict[str, Any]) -> dict[str, Any]:
        """Recursively sanitize dictionary values."""
        sanitized: dict[str, Any] = {}
        for key, value in d.items():
            if isinstance(value, dict):
                sanitized[key] = sanitize_dict(value)
            elif isinstance(key, str) and any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
                sanitized[key] = "[REDACTED]"
            else:
                sanitized[key] = value
        return sanitized

    return sanitize_dict(event_dict)


def add_correlation_id(_logger: Any, _name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Add a correlation ID to log entries if one is not already present."""
    if "correlation_id" not in event_dict:
        event_dict["correlation_id"] = str(uuid.uuid4())

    return event_dict


def add_request_context(_logger: Any, _name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Add request context information to log entries.

    Args:
        _logger: Logger instance (unused)
        _name: Logger name
        event_dict: Event dictionary to enhance

    Returns:
        Enhanced event dictionary with request context
    """
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(UTC).isoformat()

    if "logger_name" not in event_dict:
        event_dict["logger_name"] = _name

    return event_dict


def _select_renderer(log_format: str) -> Any:
    """Pick the final structlog renderer for the configured log format."""
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    if log_format == "colored":
        return structlog.dev.ConsoleRenderer(colors=True)
    return structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "event"])


def configure_enhanced_structlog(
    environment: str | None = None,
    log_level: str = "INFO",
    log_format: str = "human",
) -> None:
    """
    Configure structlog with MDC, sanitization and correlation IDs.

    Args:
        environment: Environment name (auto-detected if None)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: One of "json", "human" or "colored"
    """
    if environment is None:
        environment = detect_environment()

    # Security first - sanitize before anything else sees the event
    processors = [
        sanitize_sensitive_data,
        add_correlation_id,
        add_request_context,
        merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        _select_renderer(log_format),
    ]

    root_logger = logging.getLogger()
    root_logger.handlers = []
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=False,
    )

    structlog.get_logger(__name__).debug(
        "Structlog configured", environment=environment, log_level=log_level, log_format=log_format
    )


def setup_enhanced_logging(config: dict[str, Any], *, force_reconfigure: bool = False) -> None:
    """
    Set up logging from the "logging" section of the service configuration.

    Repeated calls are ignored unless force_reconfigure is set.

    Args:
        config: Configuration dictionary with a "logging" section
        force_reconfigure: When True, tear down existing handlers before reconfiguring
    """
    global _LOGGING_INITIALIZED
    global _LOGGING_SIGNATURE

    config_signature = json.dumps(config, sort_keys=True, default=str)

    if _LOGGING_INITIALIZED and not force_reconfigure:
        get_logger("emberhold.logging.setup").debug(
            "setup_enhanced_logging skipped; logging system already initialized",
            config_signature=_LOGGING_SIGNATURE,
        )
        return

    logging_config = config.get("logging", {})
    environment = logging_config.get("environment", detect_environment())
    log_level = logging_config.get("level", "INFO")
    log_format = logging_config.get("format", "human")

    if logging_config.get("disable_logging", False):
        configure_enhanced_structlog(environment, "CRITICAL", log_format)
    else:
        configure_enhanced_structlog(environment, log_level, log_format)
        _configure_enhanced_uvicorn_logging()

    get_logger("emberhold.logging.enhanced").info(
        "Enhanced logging system initialized",
        environment=environment,
        log_level=log_level,
        log_format=log_format,
        security_sanitization=True,
        correlation_ids=True,
    )

    _LOGGING_INITIALIZED = True
    _LOGGING_SIGNATURE = config_signature


def _configure_enhanced_uvicorn_logging() -> None:
    """Route uvicorn's loggers through the root handler."""
    for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = []
        uvicorn_logger.propagate = True


def bind_request_context(
    correlation_id: str | None = None,
    user_id: str | None = None,
    request_id: str | None = None,
    **kwargs,
) -> None:
    """
    Bind request context to the current logging context.

    Every log entry emitted afterwards in the same context carries these values.

    Args:
        correlation_id: Unique correlation ID for the request
        user_id: User ID if available
        request_id: Request ID if available
        **kwargs: Additional context variables
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())

    context_vars = {
        "correlation_id": correlation_id,
        "user_id": user_id,
        "request_id": request_id,
        **kwargs,
    }

    bind_contextvars(**{k: v for k, v in context_vars.items() if v is not None})


def clear_request_context() -> None:
    """Clear the current request context from logging."""
    clear_contextvars()


def get_current_context() -> dict[str, Any]:
    """Get the current logging context."""
    return structlog.contextvars.get_contextvars()


def get_logger(name: str) -> Any:  # Returns BoundLogger but typed as Any for flexibility
    """
    Get a structlog logger with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)
