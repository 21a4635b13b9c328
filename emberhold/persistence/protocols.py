"""
Repository protocols for the Emberhold persistence layer.

The registration service depends on these protocols rather than on the
concrete SQLAlchemy repository, so tests can substitute in-memory doubles.
"""

# pylint: disable=unnecessary-ellipsis  # Reason: Protocol method bodies use ... per typing.Protocol convention

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from emberhold.models.account import Account
    from emberhold.models.email_verification import EmailVerification
    from emberhold.models.player import Player
    from emberhold.schemas.registration import AccountCreateData, StarterTown


@dataclass(frozen=True)
class CreatedAccount:
    """Result of the atomic signup insert: the account and its verification token."""

    account: Account
    verification: EmailVerification


class RegistrationRepositoryProtocol(Protocol):
    """
    Protocol for the persistence operations used by signup.

    Implemented by emberhold.persistence.repositories.account_repository.AccountRepository.
    """

    async def find_account_by_email(self, email: str) -> Account | None:
        """Get an account by its (lower-cased) email."""
        ...

    async def find_player_by_name(self, name: str) -> Player | None:
        """Get a character by exact name."""
        ...

    async def count_monsters_by_name(self, name: str) -> int:
        """Count monsters with this name (case-insensitive)."""
        ...

    async def create_account_with_character_and_verification(self, data: AccountCreateData) -> CreatedAccount | None:
        """Insert account, main character and verification token in one transaction."""
        ...

    async def get_starter_towns(self) -> list[StarterTown]:
        """Towns a new character may start in."""
        ...
