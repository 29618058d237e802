"""
Aid Board Backend - Configuration & Logging Setup Tests
========================================================

What we test:
    ✅ DATABASE_URL is required, with an explanatory message
    ✅ postgres:// URLs are rewritten for the asyncpg driver
    ✅ Defaults (pool of 10, 0.0.0.0:3001, info logging)
    ✅ LOG_LEVEL filter expressions and setup_logging()
    ✅ Every log record carries the current request ID
"""

import logging

import pytest

from aidboard.config import (
    DATABASE_URL_HINT,
    DEFAULT_MIGRATIONS_DIR,
    get_settings,
    load_settings,
    parse_log_filter,
)
from aidboard.exceptions import ConfigurationError
from aidboard.main import setup_logging
from aidboard.middleware.request_id import RequestIDLogFilter, request_id_var


class TestSettings:

    def test_missing_database_url(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(_env_file=None)

        assert DATABASE_URL_HINT in exc_info.value.message

    def test_empty_database_url(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "   ")

        with pytest.raises(ConfigurationError, match="DATABASE_URL must be set"):
            load_settings(_env_file=None)

    @pytest.mark.parametrize("url", [
        "postgres://u:p@db:5432/aid",
        "postgresql://u:p@db:5432/aid",
        "postgresql+asyncpg://u:p@db:5432/aid",
    ])
    def test_database_url_normalized(self, url):
        settings = load_settings(database_url=url, _env_file=None)

        assert settings.database_url == "postgresql+asyncpg://u:p@db:5432/aid"

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        settings = load_settings(database_url="postgres://u:p@db/aid", _env_file=None)

        assert settings.db_pool_size == 10
        assert settings.backend_host == "0.0.0.0"
        assert settings.backend_port == 3001
        assert settings.log_level == "info"
        assert settings.migrations_dir == DEFAULT_MIGRATIONS_DIR

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("BACKEND_PORT", "8080")
        monkeypatch.setenv("DB_POOL_SIZE", "4")

        settings = load_settings(_env_file=None)

        assert settings.backend_port == 8080
        assert settings.db_pool_size == 4

    def test_invalid_log_level_falls_back_to_info(self, caplog):
        with caplog.at_level(logging.WARNING, logger="aidboard.config"):
            settings = load_settings(
                database_url="postgres://u:p@db/aid", log_level="verbose", _env_file=None
            )

        assert settings.log_level == "info"
        assert settings.log_filter == (logging.INFO, {})
        assert "verbose" in caplog.text

    def test_invalid_log_directive_falls_back_to_info(self):
        settings = load_settings(
            database_url="postgres://u:p@db/aid", log_level="debug,aidboard=loud", _env_file=None
        )

        assert settings.log_level == "info"

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestLogFilter:

    def test_bare_level(self):
        assert parse_log_filter("debug") == (logging.DEBUG, {})

    def test_default_is_info(self):
        assert parse_log_filter("") == (logging.INFO, {})

    def test_directives(self):
        level, overrides = parse_log_filter("warn, sqlalchemy.engine=debug,aidboard=TRACE")

        assert level == logging.WARNING
        assert overrides == {"sqlalchemy.engine": logging.DEBUG, "aidboard": logging.DEBUG}

    def test_unknown_level(self):
        with pytest.raises(ValueError, match="verbose"):
            parse_log_filter("info,aidboard=verbose")


class TestSetupLogging:

    def test_applies_filter(self, restore_logging):
        settings = load_settings(
            database_url="postgres://u:p@db/aid",
            log_level="error,aidboard=debug",
            _env_file=None,
        )

        setup_logging(settings)

        assert logging.getLogger().level == logging.ERROR
        assert logging.getLogger("aidboard").level == logging.DEBUG
        assert logging.getLogger("sqlalchemy.engine").level == logging.ERROR

    def test_noisy_loggers_quieted(self, restore_logging):
        settings = load_settings(database_url="postgres://u:p@db/aid", log_level="debug", _env_file=None)

        setup_logging(settings)

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        assert logging.getLogger("uvicorn.access").level == logging.WARNING

    def test_handler_stamps_request_id(self, restore_logging):
        settings = load_settings(database_url="postgres://u:p@db/aid", _env_file=None)

        setup_logging(settings)

        handler = logging.getLogger().handlers[0]
        assert any(isinstance(f, RequestIDLogFilter) for f in handler.filters)
        assert "%(request_id)s" in handler.formatter._fmt


class TestRequestIDLogFilter:

    def make_record(self):
        return logging.LogRecord("aidboard.services", logging.INFO, __file__, 1, "msg", None, None)

    def test_outside_request(self):
        token = request_id_var.set("")
        try:
            record = self.make_record()
            assert RequestIDLogFilter().filter(record) is True
        finally:
            request_id_var.reset(token)

        assert record.request_id == "-"

    def test_inside_request(self):
        token = request_id_var.set("req-7")
        try:
            record = self.make_record()
            RequestIDLogFilter().filter(record)
        finally:
            request_id_var.reset(token)

        assert record.request_id == "req-7"
