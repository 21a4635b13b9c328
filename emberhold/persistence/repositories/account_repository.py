"""
Account repository for async persistence operations.

Signup reads (uniqueness pre-checks, monster names, starter towns) and the
atomic account creation, using SQLAlchemy ORM.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from ...config.models import CharacterDefaultsConfig
from ...database import get_session_maker
from ...exceptions import DatabaseError, create_error_context
from ...models.account import Account
from ...models.email_verification import EmailVerification
from ...models.monster import Monster, Town
from ...models.player import Player
from ...schemas.registration import AccountCreateData, StarterTown
from ...structured_logging.enhanced_logging_config import get_logger
from ...utils.error_logging import log_and_raise
from ...utils.retry import retry_with_backoff
from ..protocols import CreatedAccount

logger = get_logger(__name__)

TUTORIAL_TOWN_NAME = "Dawnport Tutorial"


class AccountRepository:
    """
    Repository for account signup persistence.

    Unique constraints on accounts.email and players.name are the final
    authority on uniqueness; a create that loses a race against a concurrent
    signup returns None instead of raising.
    """

    def __init__(
        self,
        session_maker: async_sessionmaker | None = None,
        character_defaults: CharacterDefaultsConfig | None = None,
    ) -> None:
        """
        Initialize the account repository.

        Args:
            session_maker: Session factory; defaults to the application database
            character_defaults: Supplies the fallback starter town
        """
        self._session_maker = session_maker
        self._character_defaults = character_defaults or CharacterDefaultsConfig()

    @property
    def session_maker(self) -> async_sessionmaker:
        if self._session_maker is None:
            self._session_maker = get_session_maker()
        return self._session_maker

    @retry_with_backoff(max_attempts=3, initial_delay=1.0, max_delay=10.0)
    async def _scalar(self, stmt: Select[Any]) -> Any:
        async with self.session_maker() as session:
            result = await session.execute(stmt)
            return result.scalar_one_or_none()

    @retry_with_backoff(max_attempts=3, initial_delay=1.0, max_delay=10.0)
    async def _scalars(self, stmt: Select[Any]) -> Sequence[Any]:
        async with self.session_maker() as session:
            result = await session.execute(stmt)
            return result.scalars().all()

    def _raise_read_error(self, operation: str, error: SQLAlchemyError, **metadata: Any) -> None:
        context = create_error_context()
        context.metadata["operation"] = operation
        context.metadata.update(metadata)
        log_and_raise(
            DatabaseError,
            f"Database error in {operation}: {error}",
            context=context,
            details={"error": str(error), **metadata},
            user_friendly="Failed to read account information",
        )

    async def find_account_by_email(self, email: str) -> Account | None:
        """
        Get an account by email.

        Emails are stored lower-cased; the lookup lower-cases its input too.

        Raises:
            DatabaseError: If database operation fails
        """
        try:
            return await self._scalar(select(Account).where(Account.email == email.lower()))
        except SQLAlchemyError as e:
            self._raise_read_error("find_account_by_email", e)
            raise

    async def find_player_by_name(self, name: str) -> Player | None:
        """
        Get a character by exact, case-sensitive name.

        Raises:
            DatabaseError: If database operation fails
        """
        try:
            return await self._scalar(select(Player).where(Player.name == name))
        except SQLAlchemyError as e:
            self._raise_read_error("find_player_by_name", e, player_name=name)
            raise

    async def count_monsters_by_name(self, name: str) -> int:
        """
        Count monsters whose name matches, ignoring case.

        Raises:
            DatabaseError: If database operation fails
        """
        stmt = select(func.count()).select_from(Monster).where(func.lower(Monster.name) == name.lower())
        try:
            count = await self._scalar(stmt)
        except SQLAlchemyError as e:
            self._raise_read_error("count_monsters_by_name", e, monster_name=name)
            raise
        return int(count or 0)

    async def get_starter_towns(self) -> list[StarterTown]:
        """
        Towns a new character may start in.

        Falls back to the configured default town when no town is flagged as
        a starter. A leading tutorial town is skipped and the next town takes
        over id 1, the id the game server spawns fresh characters into.

        Raises:
            DatabaseError: If database operation fails
        """
        try:
            rows = await self._scalars(select(Town).where(Town.is_starter.is_(True)).order_by(Town.id))
        except SQLAlchemyError as e:
            self._raise_read_error("get_starter_towns", e)
            raise

        towns = [StarterTown(id=town.id, name=town.name) for town in rows]
        if towns and towns[0].name == TUTORIAL_TOWN_NAME:
            towns = towns[1:]
            if towns:
                towns[0] = StarterTown(id=1, name=towns[0].name)

        if not towns:
            towns = [
                StarterTown(
                    id=self._character_defaults.default_town_id,
                    name=self._character_defaults.default_town_name,
                )
            ]
        return towns

    async def create_account_with_character_and_verification(self, data: AccountCreateData) -> CreatedAccount | None:
        """
        Create an account, its main character and an email verification token.

        All three rows are written in one transaction; either all exist
        afterwards or none do.

        Returns:
            CreatedAccount, or None when a unique constraint rejected the insert

        Raises:
            DatabaseError: If database operation fails for any other reason
        """
        context = create_error_context()
        context.metadata["operation"] = "create_account_with_character_and_verification"

        account = Account(email=data.email.lower(), password_hash=data.password_hash)
        account.players.append(Player(**data.character.model_dump(), is_main=True))
        verification = EmailVerification.issue(expires_in_days=data.verification_expiry_days)
        account.email_verifications.append(verification)

        try:
            async with self.session_maker() as session:
                async with session.begin():
                    session.add(account)
        except IntegrityError as e:
            logger.warning(
                "Account creation rejected by unique constraint",
                error=str(e.orig),
                character_name=data.character.name,
            )
            return None
        except SQLAlchemyError as e:
            log_and_raise(
                DatabaseError,
                f"Database error creating account: {e}",
                context=context,
                details={"error": str(e)},
                user_friendly="Failed to create account",
            )
            raise

        logger.info(
            "Account created",
            account_id=account.id,
            character_name=data.character.name,
            verification_expires_at=verification.expires_at.isoformat(),
        )
        return CreatedAccount(account=account, verification=verification)
