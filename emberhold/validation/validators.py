"""
Field validators used by the registration form.

Each validator takes the raw submitted value and returns an error message or
None. Validators never raise for bad input; only a broken caller contract
raises InvariantViolationError.
"""

import re
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any

from ..config.models import RegistrationConfig
from ..exceptions import invariant
from ..structured_logging.enhanced_logging_config import get_logger
from ..utils.text import to_title_case
from .messages import translate

logger = get_logger(__name__)

EMAIL_RE = re.compile(r"[^@]+@[^@]+\.[^@]+")
SLUG_RE = re.compile(r"[a-z0-9-]+")
NAME_CHARSET_RE = re.compile(r"[a-z- ']+")


def presence_validator(value: Any) -> str | None:
    if not value:
        return translate("validations.required")
    return None


def string_validator(value: Any) -> str | None:
    if value and not isinstance(value, str):
        return translate("validations.string")
    return None


def email_validator(value: Any) -> str | None:
    if not isinstance(value, str):
        return translate("validations.string")
    if not EMAIL_RE.fullmatch(value):
        return translate("validations.email")
    return None


def slug_validator(value: Any) -> str | None:
    """Lowercase letters, digits and dashes, 3 to 20 characters."""
    invariant(isinstance(value, str), "Slug must be a string")
    if len(value) < 3:
        return translate("validations.min-length", min=3)
    if len(value) > 20:
        return translate("validations.max-length", max=20)
    if value != value.lower():
        return translate("validations.lower-case")
    if not SLUG_RE.fullmatch(value):
        return translate("validations.slug")
    return None


def choice_validator(choices: Iterable[str], allow_empty: bool = False) -> Callable[[Any], str | None]:
    """
    Build a validator accepting only one of the given strings, case-insensitively.

    With allow_empty, a missing or empty value passes.
    """
    allowed = tuple(choices)
    normalized = {choice.lower() for choice in allowed}

    def validator(value: Any) -> str | None:
        if not value:
            return None if allow_empty else translate("validations.required")
        if not isinstance(value, str):
            return translate("validations.string")
        if value.strip().lower() not in normalized:
            return translate("validations.choice", choices=", ".join(allowed))
        return None

    return validator


def equals_validator(expected: Any, message_key: str) -> Callable[[Any], str | None]:
    """Build a validator requiring the value to equal another submitted value."""

    def validator(value: Any) -> str | None:
        if value != expected:
            return translate(message_key)
        return None

    return validator


@dataclass(frozen=True)
class NamePolicy:
    """Character naming rules: length bounds and blocked content."""

    min_length: int = 3
    max_length: int = 20
    blocked_prefixes: tuple[str, ...] = ()
    blocked_words: tuple[str, ...] = ()

    @classmethod
    def from_config(cls, config: RegistrationConfig) -> "NamePolicy":
        """Build the policy; the product title is always a blocked word."""
        return cls(
            min_length=config.name_min_length,
            max_length=config.name_max_length,
            blocked_prefixes=tuple(prefix.lower() for prefix in config.blocked_prefixes),
            blocked_words=tuple(word.lower() for word in config.blocked_words) + (config.title.lower(),),
        )

    def is_blocked(self, value: str) -> bool:
        """True when value starts with a blocked prefix or contains a blocked word, ignoring case."""
        lowered = value.lower()
        return lowered.startswith(self.blocked_prefixes) or any(word in lowered for word in self.blocked_words)


class CharacterNameValidator:
    """
    Character name policy.

    Checks run in a fixed order and the first failure is returned; the
    monster lookup only happens for names that passed every local check.
    """

    def __init__(self, policy: NamePolicy, count_monsters_by_name: Callable[[str], Awaitable[int]]):
        self.policy = policy
        self.count_monsters_by_name = count_monsters_by_name

    async def __call__(self, value: Any) -> str | None:
        if not isinstance(value, str):
            return translate("validations.string")
        if len(value) < self.policy.min_length:
            return translate("validations.min-length", min=self.policy.min_length)
        if len(value) > self.policy.max_length:
            return translate("validations.max-length", max=self.policy.max_length)
        if to_title_case(value) != value:
            return translate("validations.title-case")

        if self.policy.is_blocked(value):
            return translate("validations.blocked-words")
        if value.strip() != value:
            return translate("validations.blocked-words")
        if not NAME_CHARSET_RE.fullmatch(value.lower()):
            return translate("validations.name")

        if await self.count_monsters_by_name(value) > 0:
            logger.info("Character name rejected: monster name", character_name=value)
            return translate("validations.name-monster")
        return None
