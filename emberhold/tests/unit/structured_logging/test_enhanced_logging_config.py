"""Tests for structlog configuration and log sanitization."""

from emberhold.structured_logging.enhanced_logging_config import (
    bind_request_context,
    clear_request_context,
    detect_environment,
    get_current_context,
    get_logger,
    sanitize_sensitive_data,
)


class TestSanitizeSensitiveData:
    """Plaintext secrets must never reach a log sink."""

    def test_redacts_sensitive_keys(self) -> None:
        event = {"event": "signup", "password": "hunter2", "api_key": "abc", "character_name": "Gregory"}
        sanitized = sanitize_sensitive_data(None, "info", event)
        assert sanitized["password"] == "[REDACTED]"
        assert sanitized["api_key"] == "[REDACTED]"
        assert sanitized["character_name"] == "Gregory"
        assert sanitized["event"] == "signup"

    def test_redacts_nested_keys(self) -> None:
        event = {"event": "x", "details": {"password_hash": "$argon2id$...", "operation": "create"}}
        sanitized = sanitize_sensitive_data(None, "info", event)
        assert sanitized["details"]["password_hash"] == "[REDACTED]"
        assert sanitized["details"]["operation"] == "create"


class TestRequestContext:
    """Test contextvars binding."""

    def test_bind_and_clear(self) -> None:
        clear_request_context()
        bind_request_context(correlation_id="abc", request_id="req-1", path="/account/signup")
        context = get_current_context()
        assert context["correlation_id"] == "abc"
        assert context["request_id"] == "req-1"
        assert "user_id" not in context
        clear_request_context()
        assert get_current_context() == {}

    def test_generates_correlation_id(self) -> None:
        clear_request_context()
        bind_request_context()
        assert get_current_context()["correlation_id"]
        clear_request_context()


class TestEnvironment:
    """Test environment detection and logger access."""

    def test_detects_pytest(self) -> None:
        assert detect_environment() == "unit_test"

    def test_get_logger(self) -> None:
        logger = get_logger("emberhold.tests")
        assert hasattr(logger, "info")
