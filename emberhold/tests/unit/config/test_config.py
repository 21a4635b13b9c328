"""Tests for the pydantic-settings configuration models."""

import pytest
from pydantic import ValidationError

from emberhold.config import get_config, reset_config
from emberhold.config.models import (
    DEFAULT_BLOCKED_PREFIXES,
    AppConfig,
    DatabaseConfig,
    LoggingConfig,
    MailConfig,
    RegistrationConfig,
    ServerConfig,
)


class TestGetConfig:
    """Test configuration loading."""

    def test_loads_from_environment(self) -> None:
        config = get_config()
        assert isinstance(config, AppConfig)
        assert config.server.port == 54731
        assert config.logging.environment == "unit_test"

    def test_fresh_instance_in_tests(self) -> None:
        assert get_config() is not get_config()

    def test_reset_config(self) -> None:
        reset_config()
        assert get_config().server.port == 54731

    def test_to_logging_dict(self) -> None:
        logging_dict = get_config().to_logging_dict()
        assert logging_dict["logging"]["environment"] == "unit_test"


class TestServerConfig:
    """Test server settings validation."""

    def test_rejects_privileged_port(self) -> None:
        with pytest.raises(ValidationError):
            ServerConfig(port=80)


class TestDatabaseConfig:
    """Test database settings validation."""

    def test_accepts_postgresql(self) -> None:
        assert DatabaseConfig(url="postgresql://u:p@localhost/emberhold").url.startswith("postgresql")

    def test_rejects_other_dialects(self) -> None:
        with pytest.raises(ValidationError):
            DatabaseConfig(url="mysql://localhost/emberhold")

    def test_rejects_zero_pool_size(self) -> None:
        with pytest.raises(ValidationError):
            DatabaseConfig(url="postgresql://localhost/emberhold", pool_size=0)


class TestLoggingConfig:
    """Test logging settings validation."""

    def test_level_is_upper_cased(self) -> None:
        assert LoggingConfig(environment="local", level="debug").level == "DEBUG"

    def test_rejects_unknown_environment(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(environment="staging")


class TestRegistrationConfig:
    """Test registration rules configuration."""

    def test_defaults(self) -> None:
        config = RegistrationConfig()
        assert config.name_min_length == 3
        assert config.name_max_length == 20
        assert config.verification_expiry_days == 30
        assert config.login_path == "/account/login"
        assert config.blocked_prefixes == DEFAULT_BLOCKED_PREFIXES

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REGISTRATION_TITLE", "Ashfall")
        assert RegistrationConfig().title == "Ashfall"

    def test_rejects_blank_title(self) -> None:
        with pytest.raises(ValidationError):
            RegistrationConfig(title="  ")


class TestMailConfig:
    """Test mail settings."""

    def test_api_url_optional(self) -> None:
        assert MailConfig().api_url is None

    def test_rejects_zero_retry_attempts(self) -> None:
        with pytest.raises(ValidationError):
            MailConfig(retry_attempts=0)
