"""
Configuration loader for the booking entries application.

Reads settings from environment variables and an optional YAML file
validated against a JSON schema. Environment variables take precedence
over the file; the file takes precedence over built-in defaults.
"""

import logging
import os
from typing import Dict, Any, Optional

import jsonschema
import yaml

from src.presentation.formatting import DISPLAY_DATE_FORMAT
from src.utils.logger import set_log_level

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Exception raised for configuration-related errors."""

    pass


DEFAULT_CONFIG_FILE = "config/bookings.yaml"
DEFAULT_LOG_LEVEL = "INFO"

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

SETTINGS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "date_format": {"type": "string", "minLength": 1},
        "log_level": {"type": "string", "minLength": 1},
        "replay_on_subscribe": {"type": "boolean"},
    },
    "additionalProperties": False,
}


def _read_bool(raw: str, name: str) -> bool:
    value = raw.strip().lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    raise ConfigurationError(f"{name} must be true or false, got '{raw}'")


class Settings:
    """
    Application settings.

    Attributes:
        date_format: strftime pattern for displaying dates (dd.MM.yyyy style)
        log_level: Name of the logging level for structured loggers
        replay_on_subscribe: Whether new store observers get the current list
        config_file: YAML file the settings were read from, if any
    """

    def __init__(
        self,
        date_format: str = DISPLAY_DATE_FORMAT,
        log_level: str = DEFAULT_LOG_LEVEL,
        replay_on_subscribe: bool = True,
        config_file: Optional[str] = None,
    ):
        log_level = log_level.upper()
        if log_level not in LOG_LEVELS:
            raise ConfigurationError(
                f"Unknown log level '{log_level}'. Expected one of {LOG_LEVELS}"
            )

        self.date_format = date_format
        self.log_level = log_level
        self.replay_on_subscribe = replay_on_subscribe
        self.config_file = config_file

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "Settings":
        """
        Build settings from defaults, the YAML file, then the environment.

        Args:
            config_path: YAML file path; defaults to BOOKINGS_CONFIG_FILE or
                config/bookings.yaml. A missing default file is not an error.

        Returns:
            Settings instance

        Raises:
            ConfigurationError: If the file or an environment value is invalid
        """
        explicit = config_path is not None or "BOOKINGS_CONFIG_FILE" in os.environ
        if config_path is None:
            config_path = os.getenv("BOOKINGS_CONFIG_FILE", DEFAULT_CONFIG_FILE)

        values: Dict[str, Any] = {}
        loaded_from = None
        if os.path.exists(config_path):
            values.update(cls._load_file(config_path))
            loaded_from = config_path
        elif explicit:
            raise ConfigurationError(f"Configuration file not found: {config_path}")
        else:
            logger.debug(f"No configuration file at {config_path}; using defaults")

        env_date_format = os.getenv("BOOKINGS_DATE_FORMAT")
        if env_date_format:
            values["date_format"] = env_date_format

        env_log_level = os.getenv("BOOKINGS_LOG_LEVEL")
        if env_log_level:
            values["log_level"] = env_log_level

        env_replay = os.getenv("BOOKINGS_REPLAY_ON_SUBSCRIBE")
        if env_replay:
            values["replay_on_subscribe"] = _read_bool(env_replay, "BOOKINGS_REPLAY_ON_SUBSCRIBE")

        return cls(config_file=loaded_from, **values)

    @staticmethod
    def _load_file(config_path: str) -> Dict[str, Any]:
        """
        Load and validate the YAML settings file.

        Raises:
            ConfigurationError: If YAML parsing or schema validation fails
        """
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Invalid YAML in settings file: {e}")
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not content:
            logger.warning(f"Empty settings file: {config_path}")
            return {}

        try:
            jsonschema.validate(instance=content, schema=SETTINGS_SCHEMA)
        except jsonschema.ValidationError as e:
            logger.error(f"Settings file failed schema validation: {e.message}")
            raise ConfigurationError(f"Settings validation failed: {e.message}") from e

        logger.info(f"Loaded settings from {config_path}")
        return content

    def apply_log_level(self) -> None:
        """Apply log_level to the root logger and all structured loggers."""
        level = getattr(logging, self.log_level)
        logging.getLogger().setLevel(level)
        set_log_level(level)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date_format": self.date_format,
            "log_level": self.log_level,
            "replay_on_subscribe": self.replay_on_subscribe,
        }
