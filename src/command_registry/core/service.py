"""
Registration service: the mutation surface of the command registry.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Optional

from command_registry.core.datamodels import (
    CommandRegistration,
    PersistedCommand,
    PersistedSnapshot,
    RegisterOutcome,
    RegisterResult,
    UnregisterOutcome,
    UnregisterResult,
)
from command_registry.core.exceptions import (
    NotFoundError,
    PersistenceFailedError,
    RegistrationFailedError,
)
from command_registry.core.helpers import normalize_name
from command_registry.core.publisher import CommandPublisher
from command_registry.core.store import CommandStore

if TYPE_CHECKING:
    from command_registry.host.interfaces import ConfigStore

logger = logging.getLogger(__name__)


class RegistrationService:
    """Registers, unregisters and lists commands.

    Every mutation and the snapshot write that follows it run under one
    lock, so two concurrent register calls for the same name can never
    both install a handler. Unregistering does not uninstall the host
    handler; it only keeps it from being installed again on the next
    start.
    """

    def __init__(
        self,
        store: CommandStore,
        publisher: CommandPublisher,
        config_store: "ConfigStore",
    ):
        self.store = store
        self.publisher = publisher
        self.config_store = config_store
        self._options = PersistedSnapshot()
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def bind_snapshot(self, snapshot: PersistedSnapshot) -> None:
        """Use snapshot as the base for future writes (keeps unknown keys)."""
        with self._lock:
            self._options = snapshot.model_copy(deep=True)

    def snapshot(self) -> PersistedSnapshot:
        """The snapshot that would be written now."""
        with self._lock:
            return self._options.model_copy(update={
                "registered_commands": [
                    PersistedCommand.from_registration(r) for r in self.store.list()
                ],
            })

    def register(self, name: str) -> RegisterResult:
        """Register a command, installing its handler on the host.

        Raises:
            InvalidArgumentError: name is missing or blank.
            RegistrationFailedError: handler installation or the initial
                publish failed. The store is left untouched.
        """
        name = normalize_name(name)
        address = self.store.address_for(name)

        with self._lock:
            if self.store.contains(address):
                logger.debug(f"Command already registered: {address}")
                return RegisterResult(
                    outcome=RegisterOutcome.ALREADY_REGISTERED, name=name, address=address
                )

            try:
                self.publisher.install(address)
                self.publisher.publish_initial(name, address)
            except Exception as e:
                logger.error(f"Failed to register command {address}: {e}")
                raise RegistrationFailedError(f"Failed to register command {name}") from e

            self.store.add(name)
            logger.info(f"Registered new command and created path: {address}")
            self.persist()

        return RegisterResult(outcome=RegisterOutcome.REGISTERED, name=name, address=address)

    def unregister(self, name: str) -> UnregisterResult:
        """Remove a command from the registry and the snapshot."""
        name = name.strip() if isinstance(name, str) else ""
        address = self.store.address_for(name)

        with self._lock:
            if not self.store.remove(address):
                return UnregisterResult(
                    outcome=UnregisterOutcome.NOT_FOUND, name=name, address=address
                )
            logger.info(f"Removed command: {address}")
            self.persist()

        return UnregisterResult(outcome=UnregisterOutcome.REMOVED, name=name, address=address)

    def list(self) -> list[CommandRegistration]:
        return self.store.list()

    def get(self, name: str) -> CommandRegistration:
        """Look up a registration by command name.

        Raises:
            NotFoundError: the command is not registered.
        """
        address = self.store.address_for(name.strip() if isinstance(name, str) else "")
        registration = self.store.get(address)
        if registration is None:
            raise NotFoundError(f"Command not found: {address}")
        return registration

    def clear_pending(self) -> None:
        """Drop the pending registration and rewrite the snapshot."""
        with self._lock:
            self._options = self._options.model_copy(update={"new_command": None})
            self.persist()

    def persist(self) -> None:
        """Write the current snapshot. Failures are logged, never raised."""
        snapshot = self.snapshot()
        try:
            self.config_store.save(snapshot, self._on_saved)
        except Exception as e:
            self._on_saved(e)

    def _on_saved(self, err: Optional[Exception]) -> None:
        if err is None:
            logger.debug("Updated registry snapshot")
            return
        failure = PersistenceFailedError(f"Snapshot write failed: {err}")
        logger.error(f"{failure}; changes may be lost on restart")
