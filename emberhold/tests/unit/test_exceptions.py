"""Tests for the exception hierarchy and the registration error taxonomy."""

import pytest

from emberhold.exceptions import (
    CharacterNameTakenError,
    DatabaseError,
    EmailTakenError,
    ErrorContext,
    InvariantViolationError,
    NetworkError,
    PersistenceFailedError,
    RegistrationError,
    RegistrationValidationFailed,
    ValidationError,
    handle_exception,
    invariant,
)


class TestRegistrationErrors:
    """Test field-scoped registration errors."""

    def test_validation_failed_carries_report(self) -> None:
        report = {"email": ["Email is required"], "characterName": ["Character name is required"]}
        error = RegistrationValidationFailed(report)
        assert error.status_code == 400
        assert error.errors == report
        assert error.to_response() == {"invalid": True, "errors": report}

    def test_email_taken(self) -> None:
        error = EmailTakenError()
        assert error.to_response() == {"errors": {"email": ["Email is already taken"]}}

    def test_character_name_taken(self) -> None:
        assert CharacterNameTakenError().errors == {"characterName": ["Character name is already taken"]}

    def test_persistence_failed_is_global(self) -> None:
        error = PersistenceFailedError(details={"character_name": "Gregory"})
        assert error.errors == {"global": ["Failed to create account"]}
        assert error.details["character_name"] == "Gregory"

    def test_all_are_registration_errors(self) -> None:
        for error in (EmailTakenError(), CharacterNameTakenError(), PersistenceFailedError()):
            assert isinstance(error, RegistrationError)

    def test_context_is_attached(self) -> None:
        context = ErrorContext(request_id="req-1")
        assert EmailTakenError(context).context.request_id == "req-1"


class TestInvariant:
    """Programming-error guards are kept apart from user errors."""

    def test_passes(self) -> None:
        invariant(True, "never raised")

    def test_raises(self) -> None:
        with pytest.raises(InvariantViolationError, match="Email must be a string"):
            invariant(False, "Email must be a string")

    def test_is_not_a_registration_error(self) -> None:
        assert not issubclass(InvariantViolationError, RegistrationError)


class TestHandleException:
    """Test conversion of foreign exceptions."""

    def test_value_error(self) -> None:
        assert isinstance(handle_exception(ValueError("bad")), ValidationError)

    def test_connection_error(self) -> None:
        assert isinstance(handle_exception(ConnectionError("down")), NetworkError)

    def test_passthrough(self) -> None:
        error = DatabaseError("x", operation="read")
        assert handle_exception(error) is error
        assert error.details["operation"] == "read"
