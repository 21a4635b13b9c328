"""
Retry utilities for transient database and network errors.

This module provides a retry decorator and helper for handling transient
errors with exponential backoff.
"""

import asyncio
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from ..structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Any])


# Transient database errors that should be retried
TRANSIENT_ERRORS = (
    "PoolAcquireTimeoutError",
    "PostgresConnectionError",
    "ConnectionDoesNotExistError",
    "InterfaceError",
    "OperationalError",
)


def is_transient_error(error: Exception) -> bool:
    """
    Check if an error is a transient database error that should be retried.

    Args:
        error: The exception to check

    Returns:
        bool: True if the error is transient and should be retried
    """
    error_type = type(error).__name__
    if error_type in TRANSIENT_ERRORS:
        return True

    # SQLAlchemy wraps driver errors; look at the original as well
    original = getattr(error, "orig", None)
    if original is not None and type(original).__name__ in TRANSIENT_ERRORS:
        return True

    return False


async def call_with_retry(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 10.0,
    exponential_base: float = 2.0,
    retry_on: tuple[type[Exception], ...] | None = None,
    **kwargs: Any,
) -> T:
    """
    Await func(*args, **kwargs), retrying transient failures with exponential backoff.

    Args:
        func: Coroutine function to call
        max_attempts: Maximum number of attempts
        initial_delay: Delay before the second attempt, in seconds
        max_delay: Upper bound for any single delay
        exponential_base: Base for exponential backoff
        retry_on: Exception types to retry (default: is_transient_error decides)

    Returns:
        Whatever func returns
    """
    for attempt in range(1, max_attempts + 1):
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            should_retry = isinstance(e, retry_on) if retry_on else is_transient_error(e)

            if not should_retry or attempt >= max_attempts:
                logger.error(
                    "Function failed after retries",
                    function=getattr(func, "__name__", repr(func)),
                    attempt=attempt,
                    max_attempts=max_attempts,
                    error=str(e),
                    error_type=type(e).__name__,
                    should_retry=should_retry,
                )
                raise

            delay = min(initial_delay * (exponential_base ** (attempt - 1)), max_delay)

            logger.warning(
                "Transient error detected, retrying",
                function=getattr(func, "__name__", repr(func)),
                attempt=attempt,
                max_attempts=max_attempts,
                delay=delay,
                error=str(e),
                error_type=type(e).__name__,
            )

            await asyncio.sleep(delay)

    raise RuntimeError("Retry logic failed unexpectedly")


def retry_with_backoff(
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 10.0,
    exponential_base: float = 2.0,
    retry_on: tuple[type[Exception], ...] | None = None,
) -> Callable[[F], F]:
    """
    Decorator to retry an async function with exponential backoff on transient errors.

    Example:
        @retry_with_backoff(max_attempts=3, initial_delay=1.0)
        async def find_account_by_email(self, email: str):
            ...
    """

    def decorator(func: F) -> F:
        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            return await call_with_retry(
                func,
                *args,
                max_attempts=max_attempts,
                initial_delay=initial_delay,
                max_delay=max_delay,
                exponential_base=exponential_base,
                retry_on=retry_on,
                **kwargs,
            )

        return async_wrapper  # type: ignore[return-value]

    return decorator
