"""Unit tests for configuration management."""

import json
import logging

import pytest

from ads_editor_mcp.core.config import (
    Environment,
    ExportConfig,
    JsonFormatter,
    LogFormat,
    LoggingConfig,
    Settings,
    get_settings,
    setup_logging,
)
from ads_editor_mcp.core.exceptions import ConfigurationError


class TestExportConfig:
    """Test export defaults."""

    def test_defaults(self):
        config = ExportConfig()
        assert config.default_budget == "100"
        assert config.default_budget_type == "Daily"
        assert config.default_bid_strategy == "Manual CPC"
        assert config.default_max_cpc == "1.00"
        assert config.keyword_campaign_name == "Keyword Campaign"
        assert config.negative_ad_group_name == "All Ad Groups"

    def test_numeric_defaults_validated(self):
        with pytest.raises(ValueError, match="Expected a numeric string"):
            ExportConfig(default_budget="lots")


class TestLoggingConfig:
    """Test logging configuration."""

    def test_level_is_normalized(self):
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_invalid_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            LoggingConfig(level="LOUD")


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ADS_EDITOR_ENVIRONMENT", raising=False)
        settings = Settings()
        assert settings.environment == Environment.DEVELOPMENT
        assert settings.logging.format == LogFormat.TEXT

    def test_nested_environment_variables(self, monkeypatch):
        monkeypatch.setenv("ADS_EDITOR_ENVIRONMENT", "production")
        monkeypatch.setenv("ADS_EDITOR_EXPORT__DEFAULT_BUDGET", "250")
        monkeypatch.setenv("ADS_EDITOR_LOGGING__FORMAT", "json")

        settings = Settings()

        assert settings.environment == Environment.PRODUCTION
        assert settings.export.default_budget == "250"
        assert settings.logging.format == LogFormat.JSON

    def test_from_env_reads_env_file(self, monkeypatch, tmp_path):
        monkeypatch.delenv("ADS_EDITOR_EXPORT__LANGUAGE", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("ADS_EDITOR_EXPORT__LANGUAGE=es\n")

        settings = Settings.from_env(env_file)

        assert settings.export.language == "es"

    def test_public_dict(self):
        public = Settings().to_public_dict()

        assert set(public) == {"environment", "debug", "export", "logging"}
        assert public["export"]["default_budget"] == "100"
        assert "log_file" not in public["logging"]

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_get_settings_wraps_validation_errors(self, monkeypatch):
        monkeypatch.setenv("ADS_EDITOR_EXPORT__DEFAULT_MAX_CPC", "cheap")

        with pytest.raises(ConfigurationError):
            get_settings()


class TestLogging:
    """Test logging setup."""

    @pytest.fixture
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield root
        root.handlers = handlers
        root.setLevel(level)

    def test_json_formatter(self):
        record = logging.LogRecord(
            "ads_editor_mcp.test", logging.INFO, __file__, 10, "hello %s", ("world",), None
        )

        data = json.loads(JsonFormatter().format(record))

        assert data["message"] == "hello world"
        assert data["level"] == "INFO"
        assert data["logger"] == "ads_editor_mcp.test"

    def test_setup_logging_with_file(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "logs" / "export.log"
        settings = Settings(
            logging=LoggingConfig(level="WARNING", format=LogFormat.JSON, log_file=log_file)
        )

        setup_logging(settings)

        assert restore_root_logger.level == logging.WARNING
        assert log_file.parent.exists()
        assert any(
            isinstance(h.formatter, JsonFormatter) for h in restore_root_logger.handlers
        )
