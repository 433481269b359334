"""
In-memory store of command registrations.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterator, Optional

from command_registry.core.datamodels import CommandRegistration
from command_registry.core.helpers import (
    DEFAULT_ADDRESS_PREFIX,
    derive_address,
    normalize_name,
    utc_now,
)

logger = logging.getLogger(__name__)


class CommandStore:
    """Mapping of address -> CommandRegistration.

    Entries are never updated in place: adding an address that already
    exists is a no-op, and the only other mutation is removal. Reads are
    safe while another thread mutates; serializing mutations together
    with their persistence write is the caller's job.
    """

    def __init__(self, prefix: str = DEFAULT_ADDRESS_PREFIX):
        self.prefix = prefix
        self._entries: dict[str, CommandRegistration] = {}
        self._lock = threading.Lock()

    def address_for(self, name: str) -> str:
        return derive_address(name, self.prefix)

    def contains(self, address: str) -> bool:
        with self._lock:
            return address in self._entries

    def get(self, address: str) -> Optional[CommandRegistration]:
        with self._lock:
            return self._entries.get(address)

    def add(self, name: str, registered_at: Optional[str] = None) -> bool:
        """Insert a registration unless its address is already present.

        Returns:
            True if the entry was inserted, False if it already existed.
        """
        name = normalize_name(name)
        address = self.address_for(name)
        with self._lock:
            if address in self._entries:
                return False
            self._entries[address] = CommandRegistration(
                name=name,
                address=address,
                registered_at=registered_at or utc_now(),
            )
        logger.debug(f"Stored command: {address}")
        return True

    def remove(self, address: str) -> bool:
        """Delete an entry. Returns True if it was present."""
        with self._lock:
            removed = self._entries.pop(address, None)
        if removed is not None:
            logger.debug(f"Dropped command: {address}")
        return removed is not None

    def list(self) -> list[CommandRegistration]:
        """Snapshot copy of all registrations."""
        with self._lock:
            return list(self._entries.values())

    def addresses(self) -> list[str]:
        with self._lock:
            return list(self._entries.keys())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, address: str) -> bool:
        return self.contains(address)

    def __iter__(self) -> Iterator[CommandRegistration]:
        return iter(self.list())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
