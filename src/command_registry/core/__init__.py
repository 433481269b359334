"""
Core module for the command_registry package.

Provides the command store, registration service, startup reconciler
and the shared write handler.
"""

from command_registry.core.datamodels import (
    CommandRegistration,
    PersistedCommand,
    PersistedSnapshot,
    PutResult,
    RegisterOutcome,
    RegisterResult,
    UnregisterOutcome,
    UnregisterResult,
)
from command_registry.core.exceptions import (
    CommandRegistryError,
    ConfigStoreError,
    InvalidArgumentError,
    NotFoundError,
    PersistenceFailedError,
    RegistrationFailedError,
    RegistryNotStartedError,
)
from command_registry.core.handler import CommandHandler
from command_registry.core.helpers import derive_address, normalize_name
from command_registry.core.publisher import CommandPublisher
from command_registry.core.reconciler import Reconciler, ReconcileReport, ResetScheduler
from command_registry.core.service import RegistrationService
from command_registry.core.store import CommandStore

__all__ = [
    # Store and services
    "CommandStore",
    "RegistrationService",
    "Reconciler",
    "ReconcileReport",
    "ResetScheduler",
    "CommandHandler",
    "CommandPublisher",
    # Models
    "CommandRegistration",
    "PersistedCommand",
    "PersistedSnapshot",
    "PutResult",
    "RegisterOutcome",
    "RegisterResult",
    "UnregisterOutcome",
    "UnregisterResult",
    # Exceptions
    "CommandRegistryError",
    "ConfigStoreError",
    "InvalidArgumentError",
    "NotFoundError",
    "PersistenceFailedError",
    "RegistrationFailedError",
    "RegistryNotStartedError",
    # Helpers
    "derive_address",
    "normalize_name",
]
