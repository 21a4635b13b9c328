"""
Multi-field validation engine.

A rule set maps each form field to an ordered list of validators. Every
validator of every field runs; failures accumulate per field in rule order.
Fields are validated concurrently, the validators of one field sequentially.
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

from ..exceptions import ErrorReport
from ..structured_logging.enhanced_logging_config import get_logger
from ..utils.text import to_proper_case

logger = get_logger(__name__)

FIELD_TOKEN = ":field"

Validator = Callable[[Any], str | None | Awaitable[str | None]]
ValidationRules = Mapping[str, Sequence[Validator]]


async def _run_validator(validator: Validator, value: Any) -> str | None:
    result = validator(value)
    if inspect.isawaitable(result):
        result = await result
    return result


async def _validate_field(key: str, validators: Sequence[Validator], value: Any) -> list[str]:
    label = to_proper_case(key)
    messages: list[str] = []
    for validator in validators:
        message = await _run_validator(validator, value)
        if message:
            messages.append(message.replace(FIELD_TOKEN, label))
    return messages


async def validate(rules: ValidationRules, data: Mapping[str, Any]) -> ErrorReport:
    """
    Run a rule set against submitted data.

    Args:
        rules: Field name to ordered validators; each validator returns an
            error message or None, synchronously or as an awaitable
        data: Raw submitted values; a missing field is passed as None

    Returns:
        ErrorReport: Field name to messages, in rule order. Valid fields are
        absent, so an empty report means the data is valid.
    """
    keys = list(rules)
    results = await asyncio.gather(*(_validate_field(key, rules[key], data.get(key)) for key in keys))
    report = {key: messages for key, messages in zip(keys, results, strict=True) if messages}

    if report:
        logger.debug("Validation failed", fields=list(report))
    return report
