"""
Unit tests for configuration loader (src/config/settings.py)

Tests covering:
- Defaults when no configuration file exists
- YAML file loading and schema validation
- Environment variable overrides
- Log level application
"""

import logging
import os

import pytest

from src.config.settings import (
    ConfigurationError,
    DEFAULT_LOG_LEVEL,
    SETTINGS_SCHEMA,
    Settings,
)
from src.utils.logger import get_logger, set_log_level


@pytest.fixture(autouse=True)
def cleanup_env(monkeypatch):
    """Remove configuration env vars for each test."""
    for key in list(os.environ.keys()):
        if key.startswith("BOOKINGS_"):
            monkeypatch.delenv(key, raising=False)
    yield
    set_log_level(logging.DEBUG)


@pytest.fixture
def config_file(tmp_path):
    def _write(content: str) -> str:
        path = tmp_path / "bookings.yaml"
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write


class TestSettingsDefaults:
    """Tests for built-in defaults."""

    def test_defaults(self):
        settings = Settings()

        assert settings.date_format == "%d.%m.%Y"
        assert settings.log_level == DEFAULT_LOG_LEVEL
        assert settings.replay_on_subscribe is True
        assert settings.config_file is None

    def test_missing_default_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        settings = Settings.load()

        assert settings.to_dict() == Settings().to_dict()

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ConfigurationError):
            Settings(log_level="LOUD")


class TestSettingsFile:
    """Tests for YAML settings files."""

    def test_load_values_from_file(self, config_file):
        path = config_file(
            'date_format: "%Y-%m-%d"\nlog_level: WARNING\nreplay_on_subscribe: false\n'
        )

        settings = Settings.load(path)

        assert settings.date_format == "%Y-%m-%d"
        assert settings.log_level == "WARNING"
        assert settings.replay_on_subscribe is False
        assert settings.config_file == path

    def test_partial_file_keeps_other_defaults(self, config_file):
        settings = Settings.load(config_file("log_level: ERROR\n"))

        assert settings.log_level == "ERROR"
        assert settings.date_format == "%d.%m.%Y"

    def test_empty_file(self, config_file):
        settings = Settings.load(config_file(""))

        assert settings.to_dict() == Settings().to_dict()

    def test_explicit_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            Settings.load(str(tmp_path / "missing.yaml"))

    def test_config_file_env_var(self, config_file, monkeypatch):
        monkeypatch.setenv("BOOKINGS_CONFIG_FILE", config_file("log_level: DEBUG\n"))

        assert Settings.load().log_level == "DEBUG"

    def test_lowercase_log_level_in_file(self, config_file):
        assert Settings.load(config_file("log_level: info\n")).log_level == "INFO"

    def test_unknown_log_level_in_file(self, config_file):
        with pytest.raises(ConfigurationError, match="Unknown log level"):
            Settings.load(config_file("log_level: LOUD\n"))

    def test_invalid_yaml(self, config_file):
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            Settings.load(config_file("date_format: [unclosed\n"))

    @pytest.mark.parametrize(
        "content",
        [
            "log_level: 3\n",
            "replay_on_subscribe: sometimes\n",
            "unknown_key: 1\n",
            "date_format: ''\n",
        ],
    )
    def test_schema_violation(self, config_file, content):
        with pytest.raises(ConfigurationError, match="validation failed"):
            Settings.load(config_file(content))

    def test_schema_rejects_additional_properties(self):
        assert SETTINGS_SCHEMA["additionalProperties"] is False


class TestSettingsEnvironment:
    """Tests for environment variable overrides."""

    def test_env_overrides_file(self, config_file, monkeypatch):
        path = config_file("log_level: ERROR\nreplay_on_subscribe: true\n")
        monkeypatch.setenv("BOOKINGS_LOG_LEVEL", "info")
        monkeypatch.setenv("BOOKINGS_REPLAY_ON_SUBSCRIBE", "false")
        monkeypatch.setenv("BOOKINGS_DATE_FORMAT", "%m/%d/%Y")

        settings = Settings.load(path)

        assert settings.log_level == "INFO"
        assert settings.replay_on_subscribe is False
        assert settings.date_format == "%m/%d/%Y"

    def test_invalid_bool(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("BOOKINGS_REPLAY_ON_SUBSCRIBE", "maybe")

        with pytest.raises(ConfigurationError):
            Settings.load()

    def test_invalid_env_log_level(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("BOOKINGS_LOG_LEVEL", "chatty")

        with pytest.raises(ConfigurationError):
            Settings.load()


class TestApplyLogLevel:
    """Tests for apply_log_level()."""

    def test_sets_root_and_structured_loggers(self):
        structured = get_logger("test_apply_log_level")
        root = logging.getLogger()
        previous = root.level

        try:
            Settings(log_level="WARNING").apply_log_level()

            assert root.level == logging.WARNING
            assert structured.logger.level == logging.WARNING
        finally:
            root.setLevel(previous)
