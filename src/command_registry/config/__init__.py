"""Configuration management for command-registry."""

from command_registry.config.settings import (
    DEFAULTS,
    Settings,
    SettingsManager,
    get_settings_manager,
)
from command_registry.config.store import JsonConfigStore

__all__ = [
    "DEFAULTS",
    "Settings",
    "SettingsManager",
    "get_settings_manager",
    "JsonConfigStore",
]
