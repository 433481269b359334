"""
CLI module for the command_registry package.
"""

from command_registry.cli.main import main

__all__ = ["main"]
