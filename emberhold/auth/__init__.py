"""Credential hashing for Emberhold accounts."""

from .argon2_utils import hash_password, needs_rehash, verify_password

__all__ = ["hash_password", "needs_rehash", "verify_password"]
