"""Tests for settings and logging setup."""

import structlog

from itemconf.config import Settings, get_settings
from itemconf.logging_config import configure_logging


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DEBUG", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("DB_SCHEMA_FILE", raising=False)

        settings = Settings(_env_file=None)

        assert settings.DEBUG is False
        assert settings.LOG_LEVEL == "info"
        assert settings.DB_SCHEMA_FILE == ""

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("DB_SCHEMA_FILE", "/etc/itemconf/tables.json")

        settings = Settings(_env_file=None)

        assert settings.LOG_LEVEL == "debug"
        assert settings.DB_SCHEMA_FILE == "/etc/itemconf/tables.json"

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestLogging:
    """Test structlog configuration."""

    def test_configure_logging(self):
        configure_logging(Settings(_env_file=None, DEBUG=True, LOG_LEVEL="warning"))

        processors = structlog.get_config()["processors"]
        assert structlog.contextvars.merge_contextvars in processors
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_unknown_level_falls_back_to_info(self):
        configure_logging(Settings(_env_file=None, LOG_LEVEL="chatty"))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def teardown_method(self):
        structlog.reset_defaults()
