"""
Plugin lifecycle for the command registry.

start() builds a fresh store, reconciles it with the persisted snapshot
and exposes the registration service and request operations. stop()
resets the in-memory registry only; the snapshot on disk is untouched.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

from command_registry.api.operations import CommandApi
from command_registry.config.settings import Settings
from command_registry.core.datamodels import PersistedSnapshot
from command_registry.core.exceptions import RegistryNotStartedError
from command_registry.core.publisher import CommandPublisher
from command_registry.core.reconciler import Reconciler, ReconcileReport, ResetScheduler, Scheduler
from command_registry.core.service import RegistrationService
from command_registry.core.store import CommandStore

if TYPE_CHECKING:
    from command_registry.host.interfaces import ConfigStore, EventBus, PutHandlerRegistry

logger = logging.getLogger(__name__)


class CommandRegistryPlugin:
    """Dynamic command registration bound to a host."""

    id = "command-registry"
    name = "Command Registration"
    description = "Allows dynamic registration of new command paths"

    def __init__(
        self,
        handlers: "PutHandlerRegistry",
        bus: "EventBus",
        config_store: "ConfigStore",
        settings: Optional[Settings] = None,
        scheduler: Optional[Scheduler] = None,
    ):
        self.handlers = handlers
        self.bus = bus
        self.config_store = config_store
        self.settings = settings or Settings()
        self.scheduler = scheduler or ResetScheduler()
        self.store: Optional[CommandStore] = None
        self._service: Optional[RegistrationService] = None
        self._api: Optional[CommandApi] = None
        self.last_report: Optional[ReconcileReport] = None

    @property
    def running(self) -> bool:
        return self._service is not None

    @property
    def service(self) -> RegistrationService:
        if self._service is None:
            raise RegistryNotStartedError("Command registry is not running")
        return self._service

    @property
    def api(self) -> CommandApi:
        if self._api is None:
            raise RegistryNotStartedError("Command registry is not running")
        return self._api

    def start(self, options: Optional[dict[str, Any] | PersistedSnapshot] = None) -> ReconcileReport:
        """Start the registry.

        Args:
            options: Persisted options to reconcile against. Loaded from
                the config store when None.

        Returns:
            Report of what reconciliation changed
        """
        logger.info("Starting command registration")

        if options is None:
            snapshot = self.config_store.load()
        elif isinstance(options, PersistedSnapshot):
            snapshot = options
        else:
            snapshot = PersistedSnapshot.from_options(options)

        if self.store is None:
            self.store = CommandStore(self.settings.get("address_prefix"))
        publisher = CommandPublisher(self.handlers, self.bus, self.settings)
        service = RegistrationService(self.store, publisher, self.config_store)
        reconciler = Reconciler(service, self.scheduler, self.settings.get("reset_delay"))

        self.last_report = reconciler.run(snapshot)
        self._service = service
        self._api = CommandApi(service)

        logger.info("Command registration started")
        return self.last_report

    def stop(self) -> None:
        """Clear the in-memory registry. Pending resets are left to lapse."""
        logger.info("Stopping command registration")
        if self.store is not None:
            self.store.clear()
        if isinstance(self.scheduler, ResetScheduler):
            self.scheduler.forget()
        self._service = None
        self._api = None
