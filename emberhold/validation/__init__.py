"""Form validation: the multi-field engine, field validators and their messages."""

from .engine import ValidationRules, Validator, validate
from .messages import translate
from .validators import (
    CharacterNameValidator,
    NamePolicy,
    choice_validator,
    email_validator,
    equals_validator,
    presence_validator,
    slug_validator,
    string_validator,
)

__all__ = [
    "CharacterNameValidator",
    "NamePolicy",
    "ValidationRules",
    "Validator",
    "choice_validator",
    "email_validator",
    "equals_validator",
    "presence_validator",
    "slug_validator",
    "string_validator",
    "translate",
    "validate",
]
