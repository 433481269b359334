"""Utility helpers for command_registry."""

from command_registry.utils.timestamps import utc_now

__all__ = ["utc_now"]
