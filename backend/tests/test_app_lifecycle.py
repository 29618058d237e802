"""
Aid Board Backend - Application Lifecycle Tests
================================================

What we test:
    ✅ Startup builds the pool, attaches it to app.state and runs migrations
    ✅ An unreachable database aborts startup before migrations
    ✅ Shutdown disposes the pool, also when the app exits with an error
    ✅ Missing DATABASE_URL aborts startup
    ✅ run() exits with status 1 on bad configuration, else serves on host:port
"""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from aidboard.config import load_settings
from aidboard.database import Database
from aidboard.exceptions import ConfigurationError, DatabaseError
from aidboard.main import create_app, run


def mock_database_instance():
    database = MagicMock()
    database.check_connection = AsyncMock()
    database.dispose = AsyncMock()
    return database


@pytest.fixture
def settings(tmp_path):
    return load_settings(
        database_url="postgres://u:p@db:5432/aid",
        migrations_dir=str(tmp_path),
        log_level="warning",
        _env_file=None,
    )


class TestLifespan:

    @pytest.mark.asyncio
    async def test_startup_and_shutdown(self, settings, restore_logging):
        database = mock_database_instance()
        app = create_app(settings)

        with patch("aidboard.main.Database") as mock_database, \
             patch("aidboard.main.apply_migrations", new=AsyncMock(return_value=False)) as mock_migrate:
            mock_database.from_settings.return_value = database

            async with app.router.lifespan_context(app):
                assert app.state.database is database
                mock_migrate.assert_awaited_once_with(database, settings.migrations_dir)
                database.dispose.assert_not_awaited()

        database.check_connection.assert_awaited_once()
        mock_database.from_settings.assert_called_once_with(settings)
        database.dispose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_database_url_aborts_startup(self, monkeypatch, tmp_path):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.chdir(tmp_path)
        app = create_app()

        with patch("aidboard.main.Database") as mock_database:
            with pytest.raises(ConfigurationError, match="DATABASE_URL must be set"):
                async with app.router.lifespan_context(app):
                    pass

        mock_database.from_settings.assert_not_called()

    @pytest.mark.asyncio
    async def test_unreachable_database_aborts_startup(self, settings, restore_logging):
        database = mock_database_instance()
        database.check_connection.side_effect = DatabaseError(
            "Could not connect to the database.", context={"host": "db"}
        )
        app = create_app(settings)

        with patch("aidboard.main.Database") as mock_database, \
             patch("aidboard.main.apply_migrations", new=AsyncMock()) as mock_migrate:
            mock_database.from_settings.return_value = database

            with pytest.raises(DatabaseError, match="Could not connect"):
                async with app.router.lifespan_context(app):
                    pass

        mock_migrate.assert_not_awaited()
        database.dispose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_pool_disposed_when_app_exits_with_error(self, settings, restore_logging):
        database = mock_database_instance()
        app = create_app(settings)

        with patch("aidboard.main.Database") as mock_database, \
             patch("aidboard.main.apply_migrations", new=AsyncMock(return_value=True)):
            mock_database.from_settings.return_value = database

            with pytest.raises(RuntimeError):
                async with app.router.lifespan_context(app):
                    raise RuntimeError("server crashed")

        database.dispose.assert_awaited_once()


class TestCheckConnection:

    @pytest.mark.asyncio
    async def test_runs_select_one(self):
        conn = MagicMock()
        conn.execute = AsyncMock()

        @asynccontextmanager
        async def connect():
            yield conn

        engine = MagicMock()
        engine.connect = connect

        await Database(engine).check_connection()

        statement = conn.execute.await_args.args[0]
        assert str(statement) == "SELECT 1"

    @pytest.mark.asyncio
    async def test_connection_failure_is_database_error(self):
        engine = MagicMock()
        engine.url.host = "db"
        engine.connect.side_effect = OSError("Connect call failed")

        with pytest.raises(DatabaseError) as exc_info:
            await Database(engine).check_connection()

        assert exc_info.value.context == {"host": "db", "error_type": "OSError"}
        assert isinstance(exc_info.value.__cause__, OSError)


class TestRun:

    def test_exits_on_configuration_error(self):
        error = ConfigurationError("DATABASE_URL must be set")

        with patch("aidboard.main.get_settings", side_effect=error), \
             patch("aidboard.main.uvicorn") as mock_uvicorn:
            with pytest.raises(SystemExit) as exc_info:
                run()

        assert exc_info.value.code == 1
        mock_uvicorn.run.assert_not_called()

    def test_serves_on_configured_address(self, settings):
        with patch("aidboard.main.get_settings", return_value=settings), \
             patch("aidboard.main.setup_logging"), \
             patch("aidboard.main.uvicorn") as mock_uvicorn:
            run()

        kwargs = mock_uvicorn.run.call_args.kwargs
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 3001
