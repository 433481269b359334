"""
Startup reconciliation of the persisted snapshot with the in-memory store.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol

from command_registry.core.datamodels import PersistedSnapshot, RegisterResult
from command_registry.core.exceptions import CommandRegistryError, InvalidArgumentError
from command_registry.core.helpers import normalize_name
from command_registry.core.service import RegistrationService

logger = logging.getLogger(__name__)


class Scheduler(Protocol):
    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        ...


class ResetScheduler:
    """Runs one-shot callbacks on daemon timers.

    Timers are never cancelled. If the process exits first they are
    dropped, which is harmless since a reset only republishes false.
    """

    def __init__(self):
        self._timers: list[threading.Timer] = []
        self._lock = threading.Lock()

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        with self._lock:
            self._timers = [t for t in self._timers if t.is_alive()]
            self._timers.append(timer)
        timer.start()

    def pending(self) -> int:
        with self._lock:
            return sum(1 for t in self._timers if t.is_alive())

    def forget(self) -> None:
        """Stop tracking outstanding timers and let them lapse."""
        with self._lock:
            self._timers = []


@dataclass
class ReconcileReport:
    """What a reconciliation pass changed."""

    pruned: list[str] = field(default_factory=list)
    restored: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    pending: Optional[RegisterResult] = None


class Reconciler:
    """Merges a persisted snapshot into the registry at startup.

    Pruning runs before restoring so an address present on both sides is
    never removed and added again. Each restored command gets a deferred
    reset to false, because the host may still hold a value from before
    the restart.
    """

    def __init__(
        self,
        service: RegistrationService,
        scheduler: Optional[Scheduler] = None,
        reset_delay: Optional[float] = None,
    ):
        self.service = service
        self.store = service.store
        self.publisher = service.publisher
        self.scheduler = scheduler or ResetScheduler()
        if reset_delay is None:
            reset_delay = self.publisher.settings.get("reset_delay")
        self.reset_delay = reset_delay

    def run(self, snapshot: Optional[PersistedSnapshot]) -> ReconcileReport:
        snapshot = snapshot or PersistedSnapshot()
        report = ReconcileReport()

        with self.service.lock:
            self.service.bind_snapshot(snapshot)
            desired = self._desired(snapshot)

            for address in self.store.addresses():
                if address not in desired:
                    self.store.remove(address)
                    report.pruned.append(address)
                    logger.warning(f"Removed command from config: {address}")

            for address, (name, registered_at) in desired.items():
                if self.store.contains(address):
                    continue
                if self._restore(name, address, registered_at):
                    report.restored.append(address)
                else:
                    report.failed.append(address)

            pending = snapshot.pending_name
            if pending is not None:
                report.pending = self._register_pending(pending)

        logger.info(
            f"Reconciled registry: {len(self.store)} commands "
            f"({len(report.restored)} restored, {len(report.pruned)} pruned)"
        )
        return report

    def _desired(self, snapshot: PersistedSnapshot) -> dict[str, tuple[str, Optional[str]]]:
        desired: dict[str, tuple[str, Optional[str]]] = {}
        for entry in snapshot.registered_commands:
            try:
                name = normalize_name(entry.command)
            except InvalidArgumentError:
                logger.warning(f"Ignoring persisted entry without a command name: {entry}")
                continue
            desired.setdefault(self.store.address_for(name), (name, entry.registered))
        return desired

    def _restore(self, name: str, address: str, registered_at: Optional[str]) -> bool:
        self.store.add(name, registered_at)
        try:
            self.publisher.install(address)
            self.publisher.publish_initial(name, address)
        except Exception as e:
            self.store.remove(address)
            logger.error(f"Failed to restore command {address}: {e}")
            return False

        self.scheduler.schedule(self.reset_delay, lambda: self.publisher.reset(address))
        logger.debug(f"Restored command from config: {address}")
        return True

    def _register_pending(self, name: str) -> Optional[RegisterResult]:
        logger.info(f"Processing new command from config: {name}")
        try:
            result = self.service.register(name)
        except CommandRegistryError as e:
            logger.error(f"Could not register command from config {name}: {e}")
            return None
        self.service.clear_pending()
        return result
