"""
Exception classes for the command registry.
"""


class CommandRegistryError(Exception):
    """Base exception for command registry errors."""


class InvalidArgumentError(CommandRegistryError):
    """Command name missing or empty after trimming."""


class NotFoundError(CommandRegistryError):
    """Command address not present in the store."""


class RegistrationFailedError(CommandRegistryError):
    """Host-side handler installation or initial publish failed."""


class PersistenceFailedError(CommandRegistryError):
    """Snapshot write failed."""


class ConfigStoreError(CommandRegistryError):
    """Persisted options could not be read."""


class RegistryNotStartedError(CommandRegistryError):
    """Registry used before start() or after stop()."""
