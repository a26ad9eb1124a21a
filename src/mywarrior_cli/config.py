"""Configuration management for mywarrior."""

import json
from pathlib import Path
from typing import Any, Literal, Optional

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, Field, ValidationError

from mywarrior_cli.utils.logger import get_logger

DEFAULT_LOG_FILE = "mywarrior.ndjson"
DEFAULT_SOUND_COMMAND = "play -nq -t alsa synth 0.5 sine 440 vol 0.5"


class TrackerConfig(BaseModel):
    """Timer configuration."""

    interval_minutes: int = Field(default=25, ge=1)
    reminder_seconds: int = Field(default=10, ge=1)
    tick_seconds: float = Field(default=0.5, gt=0, le=1)
    display: Literal["live", "plain"] = Field(default="live")
    quit_keys: str = Field(default="q")


class NotifyConfig(BaseModel):
    """Overrun reminder configuration."""

    mode: Literal["command", "bell", "none"] = Field(default="command")
    command: str = Field(default=DEFAULT_SOUND_COMMAND)


class StorageConfig(BaseModel):
    """Session log location."""

    log_file: Optional[str] = Field(default=None)


class Config(BaseModel):
    """Main configuration."""

    tracker: TrackerConfig = Field(default_factory=TrackerConfig)
    notify: NotifyConfig = Field(default_factory=NotifyConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)


class ConfigManager:
    """Manages mywarrior configuration."""

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir("mywarrior-cli"))
        self.data_dir = Path(user_data_dir("mywarrior-cli"))
        self.config_file = self.config_dir / f"{profile}.json"

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> Config:
        """Load configuration from file."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    data = json.load(f)
                return Config(**data)
            except (OSError, json.JSONDecodeError, TypeError, ValidationError) as e:
                # If config is corrupted, return default
                get_logger().warning(
                    "ignoring unreadable config %s: %s", self.config_file, e
                )
                return Config()
        return Config()

    def save_config(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.config

        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(config.model_dump(), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: if the key does not name a known setting
            ValidationError: if the value is not acceptable for the setting
        """
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                raise KeyError(key)
            current = current[k]
        if keys[-1] not in current:
            raise KeyError(key)

        current[keys[-1]] = value

        # Reload config from the modified dictionary
        self._config = Config(**config_dict)
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Reset configuration to defaults."""
        if key is None:
            self._config = Config()
        else:
            # set() rejects unknown keys
            self.set(key, self.get_from_config(Config(), key))
        self.save_config()

    def has_key(self, key: str) -> bool:
        """Check whether a dot-separated key names a known setting."""
        current: Any = self.config.model_dump()
        for k in key.split("."):
            if not isinstance(current, dict) or k not in current:
                return False
            current = current[k]
        return True

    def get_from_config(self, config: Config, key: str) -> Any:
        """Get value from a config object using dot notation."""
        keys = key.split(".")
        value: Any = config
        for k in keys:
            if isinstance(value, BaseModel):
                value = getattr(value, k, None)
            else:
                return None
        return value

    def log_path(self) -> Path:
        """Resolve the session log file, honouring ``storage.log_file``."""
        configured = self.config.storage.log_file
        if configured:
            return Path(configured).expanduser()
        return self.data_dir / DEFAULT_LOG_FILE


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager
