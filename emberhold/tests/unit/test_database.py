"""Tests for database URL handling and the DatabaseManager singleton."""

import pytest

from emberhold.database import DatabaseManager, get_database_manager, normalize_database_url


class TestNormalizeDatabaseUrl:
    """Test async driver selection."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("postgresql://u:p@db/emberhold", "postgresql+asyncpg://u:p@db/emberhold"),
            ("postgresql+asyncpg://u:p@db/emberhold", "postgresql+asyncpg://u:p@db/emberhold"),
            ("sqlite:///:memory:", "sqlite+aiosqlite:///:memory:"),
            ("sqlite+aiosqlite:///:memory:", "sqlite+aiosqlite:///:memory:"),
        ],
    )
    def test_selects_async_driver(self, url, expected) -> None:
        assert normalize_database_url(url) == expected


class TestDatabaseManager:
    """Test singleton behaviour and lazy initialization."""

    @pytest.fixture(autouse=True)
    def fresh_manager(self):
        DatabaseManager.reset_instance()
        yield
        DatabaseManager.reset_instance()

    def test_get_instance_is_singleton(self) -> None:
        assert DatabaseManager.get_instance() is get_database_manager()

    def test_direct_construction_is_rejected(self) -> None:
        DatabaseManager.get_instance()
        with pytest.raises(RuntimeError, match="get_instance"):
            DatabaseManager()

    @pytest.mark.asyncio
    async def test_lazy_engine_uses_configured_url(self) -> None:
        manager = DatabaseManager.get_instance()
        assert manager.engine is None

        engine = manager.get_engine()

        assert engine.dialect.name == "sqlite"
        assert manager.database_url == "sqlite+aiosqlite:///:memory:"
        assert manager.get_session_maker() is manager.session_maker

        await manager.close()
        assert manager.engine is None
        assert manager._initialized is False
