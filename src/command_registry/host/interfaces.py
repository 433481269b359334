"""Collaborator contracts consumed from the host."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol

if TYPE_CHECKING:
    from command_registry.core.datamodels import PersistedSnapshot, PutResult
    from command_registry.host.events import CommandEvent

# (context, address, value) -> PutResult
PutHandler = Callable[[str, str, Any], "PutResult"]
SaveCallback = Callable[[Optional[Exception]], None]


class PutHandlerRegistry(Protocol):
    """Installs write handlers. There is no way to uninstall one."""

    def install(self, context: str, address: str, handler: PutHandler, source: str) -> None:
        ...


class EventBus(Protocol):
    def publish(self, event: CommandEvent) -> None:
        ...


class ConfigStore(Protocol):
    def load(self) -> Optional[PersistedSnapshot]:
        ...

    def save(self, snapshot: PersistedSnapshot, callback: SaveCallback) -> None:
        ...
