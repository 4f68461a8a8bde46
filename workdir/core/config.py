"""Configuration management for workdir."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

_log = logging.getLogger("workdir.config")

_LOG_LEVELS = ("DEBUG", "INFO", "NOTICE", "WARNING", "ERROR", "CRITICAL")


class WorkdirConfig(BaseModel):
    """Main workdir configuration."""
    mkdir_mode: int = Field(default=0o777, ge=0, le=0o7777, description="Mode for created directories")
    autocreate: bool = Field(default=True, description="Create missing directories on change_directory")
    strict_containment: bool = Field(
        default=False,
        description="Match absolute paths against the base by path segment instead of raw prefix",
    )
    log_level: str = Field(default="INFO", description="Level for the workdir logger")
    logs_dir: Optional[Path] = Field(default=None, description="Directory for the rotating log file (None = console only)")

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        value = value.upper()
        if value not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return value


class ConfigManager:
    """Manages the workdir configuration file."""

    DEFAULT_CONFIG_DIR = Path.home() / ".workdir"
    CONFIG_FILENAME = "config.yaml"

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize the configuration manager.

        Args:
            config_dir: Custom configuration directory. Defaults to ~/.workdir
        """
        self.config_dir = Path(config_dir) if config_dir else self.DEFAULT_CONFIG_DIR
        self.config_path = self.config_dir / self.CONFIG_FILENAME
        self._config: Optional[WorkdirConfig] = None

    @property
    def config(self) -> WorkdirConfig:
        """Get the current configuration, loading if necessary."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def load(self) -> WorkdirConfig:
        """
        Load configuration from file.

        Returns:
            WorkdirConfig: Loaded configuration, or defaults if file doesn't exist.
        """
        if not self.config_path.exists():
            return WorkdirConfig()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            if data.get("logs_dir"):
                data["logs_dir"] = Path(data["logs_dir"])
            return WorkdirConfig(**data)
        except (yaml.YAMLError, ValidationError, TypeError) as e:
            _log.warning("Failed to load config from %s: %s", self.config_path, e)
            return WorkdirConfig()

    def save(self, config: Optional[WorkdirConfig] = None) -> None:
        """
        Save configuration to file.

        Args:
            config: Configuration to save. Uses current config if not provided.
        """
        if config is not None:
            self._config = config

        if self._config is None:
            self._config = WorkdirConfig()

        self.config_dir.mkdir(parents=True, exist_ok=True)

        data = self._config.model_dump()
        if data["logs_dir"] is not None:
            data["logs_dir"] = str(data["logs_dir"])

        with open(self.config_path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Field name (e.g., "autocreate")
            default: Default value if key not found

        Returns:
            Configuration value or default.
        """
        if key not in WorkdirConfig.model_fields:
            return default
        return getattr(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value, validating it against the model.

        Raises:
            KeyError: If the key does not exist.
            ValidationError: If the value is invalid for the field.
        """
        if key not in WorkdirConfig.model_fields:
            raise KeyError(f"Configuration key not found: {key}")
        setattr(self.config, key, value)

    def reset(self) -> WorkdirConfig:
        """Reset configuration to defaults."""
        self._config = WorkdirConfig()
        return self._config
