"""
Write handler bound to every registered command address.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from command_registry.core.datamodels import PutResult
from command_registry.host.events import value_event

if TYPE_CHECKING:
    from command_registry.host.interfaces import EventBus

logger = logging.getLogger(__name__)


class CommandHandler:
    """Forwards written values to the bus unchanged.

    One instance serves every address; it holds no per-command state.
    """

    def __init__(self, bus: "EventBus", source_label: str):
        self.bus = bus
        self.source_label = source_label

    def __call__(self, context: str, address: str, value: Any) -> PutResult:
        logger.debug(f"Handling write for {address} with value: {value!r}")
        self.bus.publish(value_event(context, self.source_label, address, value))
        return PutResult(state="COMPLETED", status_code=200)
