"""
Pydantic-based configuration models for the Emberhold account service.

Every section is a BaseSettings model with its own environment prefix and is
aggregated by AppConfig. Values come from the environment and an optional .env
file.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from ..structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


DEFAULT_BLOCKED_PREFIXES = ["gm", "dm", "god", "cm", "tutor", "senior", "'", "-"]

DEFAULT_BLOCKED_WORDS = [
    "admin",
    "administrator",
    "gamemaster",
    "game master",
    "game-master",
    "game'master",
    "--",
    "''",
    "' ",
    " '",
    "- ",
    " -",
    "-'",
    "'-",
]


class ServerConfig(BaseSettings):
    """Server network configuration."""

    host: str = Field(default="127.0.0.1", description="Server bind address")
    port: int = Field(..., description="Server port (required)")

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port is in valid range."""
        if not 1024 <= v <= 65535:
            logger.error("Invalid server port", port=v, valid_range="1024-65535")
            raise ValueError("Port must be between 1024 and 65535")
        return v

    model_config = {"env_prefix": "SERVER_", "case_sensitive": False, "extra": "ignore"}


class DatabaseConfig(BaseSettings):
    """Database configuration."""

    url: str = Field(..., description="Primary database URL (required)")

    # Connection pool configuration (SQLAlchemy)
    pool_size: int = Field(default=5, description="Number of connections to maintain in pool")
    max_overflow: int = Field(default=10, description="Additional connections that can be created beyond pool_size")
    pool_timeout: int = Field(default=30, description="Seconds to wait for connection from pool")
    create_tables: bool = Field(default=False, description="Create missing tables at startup (development only)")

    @field_validator("url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """PostgreSQL in deployments, SQLite only for tests and local tooling."""
        if not v:
            logger.error("Database URL validation failed - empty URL")
            raise ValueError("Database URL cannot be empty")
        if not v.startswith(("postgresql", "sqlite")):
            logger.error(
                "Database URL validation failed - invalid protocol",
                url_preview=v[:50],
                expected_protocol="postgresql",
            )
            raise ValueError("Database URL must start with 'postgresql' (or 'sqlite' for tests)")
        return v

    @field_validator("pool_size", "max_overflow", "pool_timeout")
    @classmethod
    def validate_pool_config(cls, v: int) -> int:
        """Validate pool configuration values are positive."""
        if v < 1:
            raise ValueError("Pool configuration values must be at least 1")
        return v

    model_config = {"env_prefix": "DATABASE_", "case_sensitive": False, "extra": "ignore"}


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    environment: str = Field(..., description="Logging environment (required)")
    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="colored", description="Log format")
    disable_logging: bool = Field(default=False, description="Disable all logging")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate logging environment."""
        valid_environments = ["local", "unit_test", "e2e_test", "production"]
        if v not in valid_environments:
            raise ValueError(f"Environment must be one of {valid_environments}, got '{v}'")
        return v

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}, got '{v}'")
        return v_upper

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log format."""
        valid_formats = ["json", "human", "colored"]
        if v not in valid_formats:
            raise ValueError(f"Log format must be one of {valid_formats}, got '{v}'")
        return v

    model_config = {"env_prefix": "LOGGING_", "case_sensitive": False, "extra": "ignore"}


class CORSConfig(BaseSettings):
    """CORS configuration for the signup front end."""

    allow_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the API",
    )
    allow_credentials: bool = Field(default=True, description="Allow cookies on cross-origin requests")

    model_config = {"env_prefix": "CORS_", "case_sensitive": False, "extra": "ignore"}


class RegistrationConfig(BaseSettings):
    """Account registration rules and outcomes."""

    title: str = Field(default="Emberhold", description="Product title; character names may not contain it")
    blocked_prefixes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_BLOCKED_PREFIXES),
        description="Character names may not start with any of these (case-insensitive)",
    )
    blocked_words: list[str] = Field(
        default_factory=lambda: list(DEFAULT_BLOCKED_WORDS),
        description="Character names may not contain any of these (case-insensitive)",
    )
    name_min_length: int = Field(default=3, description="Minimum character name length")
    name_max_length: int = Field(default=20, description="Maximum character name length")
    verification_expiry_days: int = Field(default=30, description="Days until an email verification token expires")
    login_path: str = Field(default="/account/login", description="Where a successful signup redirects to")
    success_message: str = Field(
        default="Account created. Check your email to confirm your account.",
        description="Flash message shown after a successful signup",
    )

    @field_validator("name_min_length", "name_max_length", "verification_expiry_days")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Value must be at least 1")
        return v

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title cannot be empty")
        return v

    model_config = {"env_prefix": "REGISTRATION_", "case_sensitive": False, "extra": "ignore"}


class MailConfig(BaseSettings):
    """Outbound mail API configuration."""

    api_url: str | None = Field(default=None, description="HTTP mail API endpoint; unset logs mail instead")
    api_key: str | None = Field(default=None, description="Bearer key for the mail API")
    sender: str = Field(default="no-reply@emberhold.example", description="From address")
    verify_url_base: str = Field(
        default="http://localhost:5173/account/verify-email",
        description="Verification link base; the token is appended as a query parameter",
    )
    timeout: float = Field(default=10.0, description="HTTP timeout in seconds")
    retry_attempts: int = Field(default=3, description="Attempts for transient transport failures")
    retry_initial_delay: float = Field(default=0.5, description="First backoff delay in seconds")

    @field_validator("retry_attempts")
    @classmethod
    def validate_retry_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("retry_attempts must be at least 1")
        return v

    model_config = {"env_prefix": "MAIL_", "case_sensitive": False, "extra": "ignore"}


class CharacterDefaultsConfig(BaseSettings):
    """Starting attributes for a newly created character."""

    level: int = Field(default=1, description="Starting level")
    vocation: int = Field(default=0, description="Starting vocation id (0 = none)")
    health: int = Field(default=150, description="Starting and maximum health")
    mana: int = Field(default=0, description="Starting and maximum mana")
    capacity: int = Field(default=400, description="Starting carrying capacity")
    soul: int = Field(default=100, description="Starting soul points")
    male_look_type: int = Field(default=128, description="Outfit for male characters")
    female_look_type: int = Field(default=136, description="Outfit for female characters")
    default_town_id: int = Field(default=8, description="Town used when no starter town is configured")
    default_town_name: str = Field(default="Thais", description="Name of the fallback town")

    @field_validator("level", "health", "capacity")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Value must be at least 1")
        return v

    model_config = {"env_prefix": "CHARACTER_", "case_sensitive": False, "extra": "ignore"}


class AppConfig(BaseSettings):
    """
    Composite application configuration.

    This is the main configuration class that aggregates all other configs.
    Access via get_config().
    """

    server: ServerConfig = Field(default_factory=ServerConfig)  # type: ignore[arg-type]
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)  # type: ignore[arg-type]
    logging: LoggingConfig = Field(default_factory=LoggingConfig)  # type: ignore[arg-type]
    cors: CORSConfig = Field(default_factory=CORSConfig)
    registration: RegistrationConfig = Field(default_factory=RegistrationConfig)
    mail: MailConfig = Field(default_factory=MailConfig)
    character: CharacterDefaultsConfig = Field(default_factory=CharacterDefaultsConfig)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "case_sensitive": False, "extra": "ignore"}

    def to_logging_dict(self) -> dict:
        """Shape expected by setup_enhanced_logging()."""
        return {"logging": self.logging.model_dump()}
