"""Tests for the field validators and the character name policy."""

from unittest.mock import AsyncMock

import pytest

from emberhold.config.models import RegistrationConfig
from emberhold.exceptions import InvariantViolationError
from emberhold.validation.validators import (
    CharacterNameValidator,
    NamePolicy,
    choice_validator,
    email_validator,
    equals_validator,
    presence_validator,
    slug_validator,
    string_validator,
)

REQUIRED = ":field is required"
NOT_A_STRING = ":field must be a string"
TOO_SHORT = ":field must be at least 3 characters long"
TOO_LONG = ":field must be at most 20 characters long"
NOT_TITLE_CASE = ":field must be capitalized, like John Doe"
BLOCKED = ":field contains a word that is not allowed"
BAD_CHARSET = ":field may only contain letters, spaces, dashes and apostrophes"
MONSTER = ":field is already the name of a monster"


class TestPrimitiveValidators:
    """Test presence, type and shape validators."""

    @pytest.mark.parametrize("value", [None, "", 0])
    def test_presence_rejects_falsy(self, value) -> None:
        assert presence_validator(value) == REQUIRED

    def test_presence_accepts_value(self) -> None:
        assert presence_validator("x") is None

    def test_string_rejects_present_non_string(self) -> None:
        assert string_validator(123) == NOT_A_STRING

    @pytest.mark.parametrize("value", [None, "", "text"])
    def test_string_accepts_absent_or_string(self, value) -> None:
        assert string_validator(value) is None

    @pytest.mark.parametrize("value", ["user@example.com", "first.last@mail.example.org"])
    def test_email_accepts_valid_shape(self, value: str) -> None:
        assert email_validator(value) is None

    @pytest.mark.parametrize("value", ["userexample.com", "user@example", "a@b@c.com", "@example.com"])
    def test_email_rejects_malformed(self, value: str) -> None:
        assert email_validator(value) == ":field must be a valid email address"

    def test_email_rejects_non_string(self) -> None:
        assert email_validator(None) == NOT_A_STRING

    def test_equals_validator(self) -> None:
        validator = equals_validator("secret", "validations.password-mismatch")
        assert validator("secret") is None
        assert validator("other") == "Passwords do not match"


class TestSlugValidator:
    """Test slug shape checks."""

    def test_accepts_slug(self) -> None:
        assert slug_validator("my-slug-1") is None

    def test_rejects_short(self) -> None:
        assert slug_validator("ab") == TOO_SHORT

    def test_rejects_long(self) -> None:
        assert slug_validator("a" * 21) == TOO_LONG

    def test_rejects_upper_case(self) -> None:
        assert slug_validator("Abc") == ":field must be lowercase"

    def test_rejects_charset(self) -> None:
        assert slug_validator("ab_c") == ":field may only contain lowercase letters, numbers and dashes"

    def test_non_string_is_a_programming_error(self) -> None:
        with pytest.raises(InvariantViolationError):
            slug_validator(5)


class TestChoiceValidator:
    """Test enumerated choice checks."""

    def test_accepts_choice_case_insensitively(self) -> None:
        validator = choice_validator(["female", "male"])
        assert validator("Male") is None

    def test_rejects_unknown_choice(self) -> None:
        validator = choice_validator(["female", "male"])
        assert validator("other") == ":field must be one of: female, male"

    def test_empty_value_required_by_default(self) -> None:
        assert choice_validator(["a"])("") == REQUIRED

    def test_empty_value_allowed(self) -> None:
        assert choice_validator(["a"], allow_empty=True)(None) is None


class TestNamePolicy:
    """Test blocked content configuration."""

    def test_from_config_blocks_product_title(self) -> None:
        policy = NamePolicy.from_config(RegistrationConfig(title="Emberhold"))
        assert "emberhold" in policy.blocked_words
        assert policy.is_blocked("Sir Emberhold")

    @pytest.mark.parametrize("value", ["Gamemaster", "GAMEMASTER", "gamemaster"])
    def test_blocked_words_ignore_case(self, value: str) -> None:
        policy = NamePolicy.from_config(RegistrationConfig())
        assert policy.is_blocked(value)

    def test_blocked_prefix(self) -> None:
        policy = NamePolicy.from_config(RegistrationConfig())
        assert policy.is_blocked("Gmfoo")
        assert not policy.is_blocked("Gregory")

    def test_policy_is_immutable(self) -> None:
        policy = NamePolicy()
        with pytest.raises(AttributeError):
            policy.min_length = 1  # type: ignore[misc]


class TestCharacterNameValidator:
    """Test the ordered, short-circuiting character name policy."""

    @pytest.fixture
    def count_monsters(self) -> AsyncMock:
        return AsyncMock(return_value=0)

    @pytest.fixture
    def validator(self, count_monsters) -> CharacterNameValidator:
        return CharacterNameValidator(NamePolicy.from_config(RegistrationConfig()), count_monsters)

    @pytest.mark.asyncio
    async def test_accepts_valid_name(self, validator, count_monsters) -> None:
        assert await validator("Gregory") is None
        count_monsters.assert_awaited_once_with("Gregory")

    @pytest.mark.asyncio
    async def test_accepts_multi_word_name(self, validator) -> None:
        assert await validator("Bob O'neil") is None

    @pytest.mark.asyncio
    async def test_short_name_reports_only_length(self, validator, count_monsters) -> None:
        assert await validator("ad") == TOO_SHORT
        count_monsters.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_long_name(self, validator) -> None:
        assert await validator("A" + "a" * 20) == TOO_LONG

    @pytest.mark.asyncio
    async def test_non_string(self, validator) -> None:
        assert await validator(42) == NOT_A_STRING

    @pytest.mark.asyncio
    async def test_requires_title_case(self, validator) -> None:
        assert await validator("gregory") == NOT_TITLE_CASE

    @pytest.mark.asyncio
    async def test_blocked_word(self, validator, count_monsters) -> None:
        assert await validator("Gamemaster") == BLOCKED
        count_monsters.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_blocked_word_in_upper_case(self, validator, count_monsters) -> None:
        assert await validator("GAMEMASTER") == BLOCKED
        count_monsters.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_lower_case_blocked_word_fails_capitalization_first(self, validator) -> None:
        assert await validator("gamemaster") == NOT_TITLE_CASE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["Anne-Marie", "McDonald", "Bob O'Neil"])
    async def test_inner_capitals_are_allowed(self, validator, value: str) -> None:
        assert await validator(value) is None

    @pytest.mark.asyncio
    async def test_blocked_prefix(self, validator) -> None:
        assert await validator("Gmfoo") == BLOCKED

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["Bob  ", " Bob"])
    async def test_surrounding_whitespace(self, validator, value: str) -> None:
        assert await validator(value) == BLOCKED

    @pytest.mark.asyncio
    async def test_charset(self, validator) -> None:
        assert await validator("Bob3") == BAD_CHARSET

    @pytest.mark.asyncio
    async def test_monster_name(self, validator, count_monsters) -> None:
        count_monsters.return_value = 1
        assert await validator("Demon") == MONSTER
        count_monsters.assert_awaited_once_with("Demon")

    @pytest.mark.asyncio
    async def test_injected_policy(self) -> None:
        validator = CharacterNameValidator(NamePolicy(blocked_words=("zed",)), AsyncMock(return_value=0))
        assert await validator("Zedd") == BLOCKED
        assert await validator("Gmfoo") is None
