"""
Settings management for command-registry.

Provides a settings file at ~/.command-registry/config.json.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".command-registry"

# Default values - single source of truth
DEFAULTS = {
    "context": "vessels.self",
    "source_label": "command-registry",
    "handler_source": "command-registry",
    "address_prefix": "commands",
    "units": "bool",
    "reset_delay": 1.0,
    "options_file": str(CONFIG_DIR / "options.json"),
    "log_file": None,
}


class Settings(BaseModel):
    """Settings for the command registry.

    All settings are optional. Use DEFAULTS for default values.
    """

    model_config = {"extra": "ignore"}

    context: Optional[str] = Field(
        default=None,
        description="Host context that handlers and events are bound to"
    )
    source_label: Optional[str] = Field(
        default=None,
        description="Source label stamped on published events"
    )
    handler_source: Optional[str] = Field(
        default=None,
        description="Source id passed when installing write handlers"
    )
    address_prefix: Optional[str] = Field(
        default=None,
        description="Prefix of every command address"
    )
    units: Optional[str] = Field(
        default=None,
        description="Units advertised in command metadata"
    )
    reset_delay: Optional[float] = Field(
        default=None,
        description="Seconds before a restored command is reset to false"
    )
    options_file: Optional[str] = Field(
        default=None,
        description="Path of the persisted registry snapshot"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional log file path"
    )

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting with fallback to DEFAULTS, then to provided default."""
        value = getattr(self, key, None)
        if value is not None:
            return value
        return DEFAULTS.get(key, default)


class SettingsManager:
    """Manages loading and saving settings."""

    CONFIG_DIR = CONFIG_DIR
    CONFIG_FILE = CONFIG_DIR / "config.json"

    def __init__(self, config_file: Optional[Path] = None):
        self.config_file = config_file or self.CONFIG_FILE
        self._settings: Optional[Settings] = None

    @property
    def settings(self) -> Settings:
        """Get the current settings, loading if necessary."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    def load(self) -> Settings:
        """Load settings from file, or defaults if it is missing or invalid."""
        if not self.config_file.exists():
            return Settings()

        try:
            data = json.loads(self.config_file.read_text())
            return Settings.model_validate(data)
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning(f"Invalid settings file {self.config_file} ({e}), using defaults")
            return Settings()

    def save(self, settings: Optional[Settings] = None) -> Path:
        """Save settings, writing only values that are set."""
        if settings is not None:
            self._settings = settings
        if self._settings is None:
            self._settings = Settings()

        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        data = {k: v for k, v in self._settings.model_dump().items() if v is not None}
        self.config_file.write_text(json.dumps(data, indent=2) + "\n")
        return self.config_file

    def set(self, key: str, value: Any) -> None:
        """Set a single setting and save."""
        self._settings = self.load()
        if key not in Settings.model_fields:
            raise ValueError(f"Unknown setting: {key}")
        # model_validate coerces string input to the field type
        self._settings = Settings.model_validate({**self._settings.model_dump(), key: value})
        self.save()

    def get(self, key: str, default: Any = None) -> Any:
        return self.settings.get(key, default)


# Singleton instance
_manager: Optional[SettingsManager] = None


def get_settings_manager() -> SettingsManager:
    """Get the singleton SettingsManager instance."""
    global _manager
    if _manager is None:
        _manager = SettingsManager()
    return _manager
