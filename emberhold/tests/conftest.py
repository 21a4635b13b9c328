"""
Test configuration and fixtures for the Emberhold test suite.

Environment variables are set before any emberhold module is imported so
configuration and the Argon2 hasher pick up test values.
"""

import os

os.environ.setdefault("SERVER_PORT", "54731")
os.environ.setdefault("SERVER_HOST", "127.0.0.1")
os.environ.setdefault("LOGGING_ENVIRONMENT", "unit_test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
# Cheap hashing keeps the suite fast
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")
os.environ.pop("MAIL_API_URL", None)

from collections.abc import AsyncGenerator  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from emberhold.config.models import CharacterDefaultsConfig, RegistrationConfig  # noqa: E402
from emberhold.models import Base  # noqa: E402
from emberhold.persistence.repositories.account_repository import AccountRepository  # noqa: E402


@pytest.fixture
async def session_maker() -> AsyncGenerator[async_sessionmaker, None]:
    """Fresh in-memory SQLite database with every table created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    await engine.dispose()


@pytest.fixture
def character_defaults() -> CharacterDefaultsConfig:
    return CharacterDefaultsConfig()


@pytest.fixture
def registration_config() -> RegistrationConfig:
    return RegistrationConfig()


@pytest.fixture
def account_repository(session_maker, character_defaults) -> AccountRepository:
    return AccountRepository(session_maker, character_defaults=character_defaults)


@pytest.fixture
def mock_mailer() -> MagicMock:
    """Mailer double that reports every message as sent."""
    mailer = MagicMock()
    mailer.send_verification_email = AsyncMock(return_value=True)
    return mailer


@pytest.fixture
async def seed(session_maker):
    """Insert ORM objects in one committed transaction."""

    async def _seed(*objects) -> None:
        async with session_maker() as session:
            async with session.begin():
                session.add_all(objects)

    return _seed
