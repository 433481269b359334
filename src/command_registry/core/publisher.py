"""
Host-side side effects of registering a command.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from command_registry.config.settings import Settings
from command_registry.core.handler import CommandHandler
from command_registry.host.events import value_event

if TYPE_CHECKING:
    from command_registry.host.interfaces import EventBus, PutHandlerRegistry

logger = logging.getLogger(__name__)


class CommandPublisher:
    """Installs the shared write handler and publishes command values."""

    def __init__(
        self,
        handlers: "PutHandlerRegistry",
        bus: "EventBus",
        settings: Settings | None = None,
    ):
        self.handlers = handlers
        self.bus = bus
        self.settings = settings or Settings()
        self.context = self.settings.get("context")
        self.source_label = self.settings.get("source_label")
        self.handler = CommandHandler(bus, self.source_label)

    def install(self, address: str) -> None:
        self.handlers.install(
            self.context, address, self.handler, self.settings.get("handler_source")
        )
        logger.debug(f"Installed write handler at {address}")

    def publish_initial(self, name: str, address: str) -> None:
        """Publish value false together with the command's metadata."""
        self.bus.publish(value_event(
            self.context,
            self.source_label,
            address,
            False,
            units=self.settings.get("units"),
            description=f"Command: {name}",
        ))

    def publish_value(self, address: str, value: Any) -> None:
        self.bus.publish(value_event(self.context, self.source_label, address, value))

    def reset(self, address: str) -> None:
        """Publish false again. Scheduled after a command is restored."""
        try:
            self.publish_value(address, False)
        except Exception as e:
            logger.error(f"Failed to reset {address} to false: {e}")
            return
        logger.debug(f"Reset command to false at startup: {address}")
