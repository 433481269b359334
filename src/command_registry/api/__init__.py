"""Produced operations of the command registry."""

from command_registry.api.operations import ApiResponse, CommandApi, RegisterCommandRequest

__all__ = [
    "ApiResponse",
    "CommandApi",
    "RegisterCommandRequest",
]
