"""In-memory host used by the CLI and the test suite."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Optional

from command_registry.core.datamodels import PersistedSnapshot, PutResult
from command_registry.host.events import CommandEvent
from command_registry.host.interfaces import PutHandler, SaveCallback

logger = logging.getLogger(__name__)


@dataclass
class Installation:
    context: str
    address: str
    handler: PutHandler
    source: str


class InMemoryHost:
    """Records handler installations and published events."""

    def __init__(self):
        self.installations: list[Installation] = []
        self.events: list[CommandEvent] = []
        self._values: dict[str, Any] = {}
        self._lock = threading.Lock()

    def install(self, context: str, address: str, handler: PutHandler, source: str) -> None:
        with self._lock:
            self.installations.append(Installation(context, address, handler, source))
        logger.debug(f"Installed put handler for {context}.{address}")

    def publish(self, event: CommandEvent) -> None:
        with self._lock:
            self.events.append(event)
            for pv in event.values:
                self._values[pv.path] = pv.value

    def handler_for(self, address: str) -> Optional[Installation]:
        """Most recent installation at an address."""
        with self._lock:
            for inst in reversed(self.installations):
                if inst.address == address:
                    return inst
        return None

    def installed_addresses(self) -> list[str]:
        with self._lock:
            return [inst.address for inst in self.installations]

    def put(self, address: str, value: Any) -> PutResult:
        """Simulate a host write through the installed handler."""
        inst = self.handler_for(address)
        if inst is None:
            raise KeyError(f"No put handler installed for {address}")
        return inst.handler(inst.context, address, value)

    def last_value(self, address: str) -> Any:
        with self._lock:
            return self._values.get(address)

    def events_for(self, address: str) -> list[CommandEvent]:
        with self._lock:
            return [e for e in self.events if any(v.path == address for v in e.values)]


class InMemoryConfigStore:
    """ConfigStore keeping the snapshot in memory."""

    def __init__(self, options: Optional[dict[str, Any]] = None):
        self.options = options
        self.saves: list[dict[str, Any]] = []

    def load(self) -> Optional[PersistedSnapshot]:
        if self.options is None:
            return None
        return PersistedSnapshot.from_options(self.options)

    def save(self, snapshot: PersistedSnapshot, callback: SaveCallback) -> None:
        self.options = snapshot.to_options()
        self.saves.append(self.options)
        callback(None)
