"""
Helper functions for the command registry.
"""

from __future__ import annotations

from command_registry.core.exceptions import InvalidArgumentError
from command_registry.utils.timestamps import utc_now

DEFAULT_ADDRESS_PREFIX = "commands"

__all__ = ["DEFAULT_ADDRESS_PREFIX", "derive_address", "normalize_name", "utc_now"]


def normalize_name(name) -> str:
    """Trim a command name, rejecting anything empty."""
    if not isinstance(name, str):
        raise InvalidArgumentError("Command name must be a string")
    name = name.strip()
    if not name:
        raise InvalidArgumentError("Command name required")
    return name


def derive_address(name: str, prefix: str = DEFAULT_ADDRESS_PREFIX) -> str:
    """Derive the unique address for a command name."""
    return f"{prefix}.{name}"
