"""
Account registration workflow.

A signup moves through a fixed sequence: validate the form, normalize the
values, pre-check email and character name uniqueness, hash the password,
create account + main character + verification token atomically, send the
verification email and redirect to the login page. Every early exit raises a
RegistrationError subclass and happens before anything is persisted.
"""

import asyncio
from collections.abc import Callable, Mapping
from typing import Any

from ..auth.argon2_utils import hash_password
from ..config.models import RegistrationConfig
from ..exceptions import (
    CharacterNameTakenError,
    DatabaseError,
    EmailTakenError,
    ErrorContext,
    InvariantViolationError,
    PersistenceFailedError,
    RegistrationValidationFailed,
    invariant,
)
from ..game.character_factory import CharacterFactory
from ..models.enums import (
    PLAYER_PRONOUN_CHOICES,
    PLAYER_SEX_CHOICES,
    parse_player_pronoun,
    parse_player_sex,
)
from ..notifications.mailer import VerificationMailer
from ..persistence.protocols import RegistrationRepositoryProtocol
from ..schemas.registration import AccountCreateData, FlashMessage, RegistrationRedirect
from ..structured_logging.enhanced_logging_config import get_logger
from ..validation.engine import ValidationRules, validate
from ..validation.validators import (
    CharacterNameValidator,
    NamePolicy,
    choice_validator,
    email_validator,
    equals_validator,
    presence_validator,
    string_validator,
)

logger = get_logger(__name__)

SIGNUP_FIELDS = (
    "email",
    "password",
    "passwordConfirmation",
    "characterName",
    "characterSex",
    "characterPronouns",
)


class RegistrationService:
    """Creates an account, its first character and an email verification token."""

    def __init__(
        self,
        repository: RegistrationRepositoryProtocol,
        mailer: VerificationMailer,
        config: RegistrationConfig | None = None,
        character_factory: CharacterFactory | None = None,
        password_hasher: Callable[[str], str] = hash_password,
    ):
        self.repository = repository
        self.mailer = mailer
        self.config = config or RegistrationConfig()
        self.character_factory = character_factory or CharacterFactory(repository)
        self.password_hasher = password_hasher
        self.name_validator = CharacterNameValidator(
            NamePolicy.from_config(self.config), repository.count_monsters_by_name
        )

    def signup_rules(self, password: Any) -> ValidationRules:
        """Rule set for the signup form; the confirmation is compared against password."""
        return {
            "email": [presence_validator, email_validator],
            "password": [presence_validator, string_validator],
            "passwordConfirmation": [
                presence_validator,
                string_validator,
                equals_validator(password, "validations.password-mismatch"),
            ],
            "characterName": [presence_validator, self.name_validator],
            "characterSex": [
                presence_validator,
                string_validator,
                choice_validator(PLAYER_SEX_CHOICES, allow_empty=True),
            ],
            "characterPronouns": [string_validator, choice_validator(PLAYER_PRONOUN_CHOICES, allow_empty=True)],
        }

    async def register(self, form: Mapping[str, Any], context: ErrorContext | None = None) -> RegistrationRedirect:
        """
        Run the signup workflow for one form submission.

        Args:
            form: Raw submitted fields
            context: Request context attached to any error raised

        Returns:
            RegistrationRedirect to the login page with a success flash

        Raises:
            RegistrationValidationFailed: The form has field errors
            EmailTakenError: An account already uses the email
            CharacterNameTakenError: A character already uses the name
            PersistenceFailedError: The atomic create produced no account
            InvariantViolationError: Validated values do not have the expected shape
            DatabaseError: A uniqueness lookup failed
        """
        data = {field: form.get(field) for field in SIGNUP_FIELDS}
        password = data["password"]

        report = await validate(self.signup_rules(password), data)
        if report:
            raise RegistrationValidationFailed(report, context)

        email = data["email"]
        character_name = data["characterName"]
        character_sex = data["characterSex"]
        invariant(email and password and character_name and character_sex, "Missing required fields")
        invariant(isinstance(email, str), "Email must be a string")
        invariant(isinstance(password, str), "Password must be a string")
        invariant(isinstance(character_name, str), "Character name must be a string")
        invariant(isinstance(character_sex, str), "Character sex must be a string")

        email = email.lower()
        try:
            sex = parse_player_sex(character_sex)
            pronoun = parse_player_pronoun(data["characterPronouns"])
        except ValueError as e:
            raise InvariantViolationError(f"Invariant failed: {e}", context) from e

        if await self.repository.find_account_by_email(email) is not None:
            raise EmailTakenError(context)

        character = await self.character_factory.generate_character_input(character_name, pronoun, sex)

        if await self.repository.find_player_by_name(character_name) is not None:
            raise CharacterNameTakenError(context)

        password_hash = await asyncio.to_thread(self.password_hasher, password)

        create_data = AccountCreateData(
            email=email,
            password_hash=password_hash,
            character=character,
            verification_expiry_days=self.config.verification_expiry_days,
        )
        try:
            created = await self.repository.create_account_with_character_and_verification(create_data)
        except DatabaseError as e:
            raise PersistenceFailedError(context, details={"cause": e.message}) from e
        if created is None or created.account is None or created.verification is None:
            raise PersistenceFailedError(context, details={"character_name": character_name})

        account = created.account
        logger.info("Account registered", account_id=account.id, character_name=character_name)

        sent = await self.mailer.send_verification_email(account.email, created.verification.token)
        if not sent:
            logger.warning("Verification email not delivered", account_id=account.id)

        return RegistrationRedirect(
            location=self.config.login_path,
            flash=FlashMessage(type="success", message=self.config.success_message),
            account_id=account.id,
        )
