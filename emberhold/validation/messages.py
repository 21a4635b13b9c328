"""
Message catalog for validation errors.

Messages may carry {param} placeholders, interpolated by translate(), and the
:field token, which the validation engine replaces with the display name of
the field being validated.
"""

from typing import Any

from ..structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)

MESSAGES: dict[str, str] = {
    "validations.required": ":field is required",
    "validations.string": ":field must be a string",
    "validations.email": ":field must be a valid email address",
    "validations.min-length": ":field must be at least {min} characters long",
    "validations.max-length": ":field must be at most {max} characters long",
    "validations.lower-case": ":field must be lowercase",
    "validations.slug": ":field may only contain lowercase letters, numbers and dashes",
    "validations.title-case": ":field must be capitalized, like John Doe",
    "validations.blocked-words": ":field contains a word that is not allowed",
    "validations.name": ":field may only contain letters, spaces, dashes and apostrophes",
    "validations.name-monster": ":field is already the name of a monster",
    "validations.choice": ":field must be one of: {choices}",
    "validations.password-mismatch": "Passwords do not match",
}


def translate(key: str, **params: Any) -> str:
    """
    Look up a message by key and interpolate its parameters.

    Unknown keys are returned unchanged so a missing entry shows up in the UI
    instead of failing the request.
    """
    template = MESSAGES.get(key)
    if template is None:
        logger.warning("Missing translation", message_id=key)
        return key
    if not params:
        return template
    return template.format(**params)
