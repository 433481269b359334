"""Host collaborators: handler installation, event bus and config store."""

from command_registry.host.events import (
    CommandEvent,
    MetaValue,
    PathMeta,
    PathValue,
    value_event,
)
from command_registry.host.interfaces import (
    ConfigStore,
    EventBus,
    PutHandler,
    PutHandlerRegistry,
    SaveCallback,
)
from command_registry.host.memory import InMemoryConfigStore, InMemoryHost, Installation

__all__ = [
    # Events
    "CommandEvent",
    "MetaValue",
    "PathMeta",
    "PathValue",
    "value_event",
    # Interfaces
    "ConfigStore",
    "EventBus",
    "PutHandler",
    "PutHandlerRegistry",
    "SaveCallback",
    # In-memory
    "InMemoryConfigStore",
    "InMemoryHost",
    "Installation",
]
