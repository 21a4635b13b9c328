"""Persistence layer for the Emberhold account service."""

from .protocols import CreatedAccount, RegistrationRepositoryProtocol

__all__ = ["CreatedAccount", "RegistrationRepositoryProtocol"]
