"""
Argon2id credential hashing for Emberhold accounts.

Plaintext passwords are only ever handled here; they are never stored or
logged. Cost parameters come from the environment so deployments and tests
can tune them:

    ARGON2_TIME_COST     1..10          (default 3)
    ARGON2_MEMORY_COST   1024..1048576  KiB (default 65536)
    ARGON2_PARALLELISM   1..16          (default 1)
    ARGON2_HASH_LENGTH   16..64         bytes (default 32)
"""

import os

from argon2 import PasswordHasher, Type, exceptions

from ..exceptions import AuthenticationError
from ..structured_logging.enhanced_logging_config import get_logger
from ..utils.error_logging import log_and_raise

logger = get_logger(__name__)

ARGON2_PREFIX = "$argon2"

_PARAMETER_RANGES = {
    "ARGON2_TIME_COST": (3, 1, 10),
    "ARGON2_MEMORY_COST": (65536, 1024, 1048576),
    "ARGON2_PARALLELISM": (1, 1, 16),
    "ARGON2_HASH_LENGTH": (32, 16, 64),
}


def _read_parameter(name: str) -> int:
    default, low, high = _PARAMETER_RANGES[name]
    value = int(os.getenv(name, str(default)))
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")
    return value


TIME_COST = _read_parameter("ARGON2_TIME_COST")
MEMORY_COST = _read_parameter("ARGON2_MEMORY_COST")
PARALLELISM = _read_parameter("ARGON2_PARALLELISM")
HASH_LENGTH = _read_parameter("ARGON2_HASH_LENGTH")

_hasher = PasswordHasher(
    type=Type.ID,
    time_cost=TIME_COST,
    memory_cost=MEMORY_COST,
    parallelism=PARALLELISM,
    hash_len=HASH_LENGTH,
)

logger.info(
    "Argon2 hasher configured",
    time_cost=TIME_COST,
    memory_cost=MEMORY_COST,
    parallelism=PARALLELISM,
    hash_length=HASH_LENGTH,
)


def hash_password(password: str) -> str:
    """
    Hash a plaintext password with Argon2id.

    Returns:
        Encoded hash, e.g. $argon2id$v=19$m=65536,t=3,p=1$...

    Raises:
        AuthenticationError: If password is not a string or hashing fails
    """
    if not isinstance(password, str):
        logger.error("Password must be a string", password_type=type(password).__name__)  # type: ignore[unreachable]
        raise AuthenticationError("Password must be a string", auth_type="argon2")

    try:
        return _hasher.hash(password)
    except exceptions.HashingError as e:
        log_and_raise(
            AuthenticationError,
            f"Failed to hash password: {e}",
            details={"original_error": str(e), "error_type": type(e).__name__},
            user_friendly="Password processing failed",
        )
        raise


def verify_password(password: str, hashed: str) -> bool:
    """Check a plaintext password against a stored Argon2 hash."""
    if not isinstance(password, str) or not hashed:
        logger.warning("Password verification skipped - missing input")
        return False

    try:
        return _hasher.verify(hashed, password)
    except exceptions.VerifyMismatchError:
        return False
    except (exceptions.VerificationError, exceptions.InvalidHashError) as e:
        logger.warning("Password verification failed", error=str(e), error_type=type(e).__name__)
        return False


def needs_rehash(hashed: str) -> bool:
    """True when a hash is not Argon2 or was made with different cost parameters."""
    if not isinstance(hashed, str) or not hashed.startswith(ARGON2_PREFIX):
        return True
    try:
        return _hasher.check_needs_rehash(hashed)
    except exceptions.InvalidHashError:
        return True
