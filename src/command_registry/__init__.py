"""
command_registry - Dynamic command registry

Lets callers register named commands, each of which becomes a writable
address backed by a boolean default value. The registry survives
restarts through a persisted snapshot that is reconciled at startup.

Example usage:
    from command_registry import CommandRegistryPlugin, JsonConfigStore
    from command_registry.host import InMemoryHost

    host = InMemoryHost()
    plugin = CommandRegistryPlugin(host, host, JsonConfigStore("options.json"))
    plugin.start()

    plugin.service.register("captureWeather")
    host.put("commands.captureWeather", True)
"""

__version__ = "0.1.0"

from command_registry.api import ApiResponse, CommandApi
from command_registry.config import JsonConfigStore, Settings
from command_registry.core import (
    CommandHandler,
    CommandRegistration,
    CommandRegistryError,
    CommandStore,
    InvalidArgumentError,
    NotFoundError,
    PersistedSnapshot,
    PersistenceFailedError,
    Reconciler,
    RegisterOutcome,
    RegisterResult,
    RegistrationFailedError,
    RegistrationService,
    RegistryNotStartedError,
    UnregisterOutcome,
    UnregisterResult,
)
from command_registry.plugin import CommandRegistryPlugin

__all__ = [
    # Version
    "__version__",
    # Lifecycle
    "CommandRegistryPlugin",
    # Core
    "CommandStore",
    "RegistrationService",
    "Reconciler",
    "CommandHandler",
    "CommandRegistration",
    "PersistedSnapshot",
    "RegisterOutcome",
    "RegisterResult",
    "UnregisterOutcome",
    "UnregisterResult",
    # Exceptions
    "CommandRegistryError",
    "InvalidArgumentError",
    "NotFoundError",
    "PersistenceFailedError",
    "RegistrationFailedError",
    "RegistryNotStartedError",
    # Config
    "Settings",
    "JsonConfigStore",
    # API
    "ApiResponse",
    "CommandApi",
]
