"""Tests for the multi-field validation engine."""

import asyncio

import pytest

from emberhold.validation.engine import validate


def fails_with(message):
    def validator(value):
        return message

    return validator


def passes(value):
    return None


async def async_fails_with_value(value):
    return f":field got {value}"


class TestValidate:
    """Test report aggregation."""

    @pytest.mark.asyncio
    async def test_empty_rules_yield_empty_report(self) -> None:
        assert await validate({}, {"email": "x"}) == {}

    @pytest.mark.asyncio
    async def test_valid_fields_are_absent_from_report(self) -> None:
        report = await validate({"email": [passes], "password": [fails_with("bad")]}, {})
        assert report == {"password": ["bad"]}

    @pytest.mark.asyncio
    async def test_all_validators_run_in_rule_order(self) -> None:
        """Earlier failures do not suppress later ones."""
        rules = {"characterName": [fails_with("first"), passes, fails_with("second"), fails_with("third")]}
        report = await validate(rules, {"characterName": "x"})
        assert report == {"characterName": ["first", "second", "third"]}

    @pytest.mark.asyncio
    async def test_field_token_is_replaced_with_label(self) -> None:
        report = await validate({"passwordConfirmation": [fails_with(":field is required")]}, {})
        assert report == {"passwordConfirmation": ["Password confirmation is required"]}

    @pytest.mark.asyncio
    async def test_sync_and_async_validators_mix(self) -> None:
        rules = {"characterName": [fails_with("sync"), async_fails_with_value]}
        report = await validate(rules, {"characterName": "Bob"})
        assert report == {"characterName": ["sync", "Character name got Bob"]}

    @pytest.mark.asyncio
    async def test_missing_field_is_passed_as_none(self) -> None:
        seen = []

        def record(value):
            seen.append(value)
            return None

        await validate({"email": [record]}, {})
        assert seen == [None]

    @pytest.mark.asyncio
    async def test_report_is_idempotent(self) -> None:
        rules = {"email": [fails_with("a")], "password": [passes, fails_with("b")]}
        data = {"email": "x"}
        assert await validate(rules, data) == await validate(rules, data)

    @pytest.mark.asyncio
    async def test_report_keys_follow_rule_order(self) -> None:
        rules = {"b": [fails_with("x")], "a": [fails_with("y")], "c": [fails_with("z")]}
        report = await validate(rules, {})
        assert list(report) == ["b", "a", "c"]


class TestConcurrency:
    """Fields run concurrently, validators of one field sequentially."""

    @pytest.mark.asyncio
    async def test_fields_are_validated_concurrently(self) -> None:
        """Field a waits on an event only field b sets; sequential execution would hang."""
        released = asyncio.Event()

        async def wait_for_other_field(value):
            await released.wait()
            return None

        async def release(value):
            released.set()
            return None

        report = await asyncio.wait_for(validate({"a": [wait_for_other_field], "b": [release]}, {}), timeout=2)
        assert report == {}

    @pytest.mark.asyncio
    async def test_validators_of_one_field_run_sequentially(self) -> None:
        calls = []

        async def slow(value):
            calls.append("slow-start")
            await asyncio.sleep(0.01)
            calls.append("slow-end")
            return None

        def fast(value):
            calls.append("fast")
            return None

        await validate({"email": [slow, fast]}, {"email": "x"})
        assert calls == ["slow-start", "slow-end", "fast"]
