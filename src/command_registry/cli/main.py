#!/usr/bin/env python3
"""
CLI entry point for administering the command registry (command-registry command).

Works on the persisted snapshot: list what is registered, queue a new
command for the next start, drop a command, or run a reconciliation
against an in-memory host to see the resulting registry.
"""

import argparse
import json
import sys
from pathlib import Path

from command_registry.config import JsonConfigStore, Settings, get_settings_manager
from command_registry.core import (
    CommandRegistryError,
    InvalidArgumentError,
    NotFoundError,
    PersistedSnapshot,
    derive_address,
    normalize_name,
)
from command_registry.logging import configure_logging


def _settings(args) -> Settings:
    settings = get_settings_manager().settings
    updates = {}
    if args.options_file:
        updates["options_file"] = args.options_file
    if args.log_file:
        updates["log_file"] = args.log_file
    return settings.model_copy(update=updates) if updates else settings


def _store(settings: Settings) -> JsonConfigStore:
    return JsonConfigStore(Path(settings.get("options_file")))


def _load(store: JsonConfigStore) -> PersistedSnapshot:
    return store.load() or PersistedSnapshot()


def _save(store: JsonConfigStore, snapshot: PersistedSnapshot) -> None:
    errors = []
    store.save(snapshot, lambda err: errors.append(err) if err else None)
    if errors:
        raise CommandRegistryError(f"Could not write {store.path}: {errors[0]}")


def cmd_list(args, settings: Settings):
    """List commands recorded in the snapshot."""
    snapshot = _load(_store(settings))
    prefix = settings.get("address_prefix")
    commands = [
        {
            "command": entry.command.strip(),
            "path": derive_address(entry.command.strip(), prefix),
            "registered": entry.registered,
        }
        for entry in snapshot.registered_commands
        if entry.command and entry.command.strip()
    ]

    if args.as_json:
        print(json.dumps({
            "registeredCommands": commands,
            "newCommand": snapshot.pending_name,
        }, indent=2))
        return

    print("\nRegistered commands:")
    if not commands:
        print("  (none)")
    for cmd in commands:
        print(f"  - {cmd['path']}  (registered {cmd['registered'] or 'unknown'})")
    if snapshot.pending_name:
        print(f"\nPending: {snapshot.pending_name} (registered on next start)")
    print()


def cmd_add(args, settings: Settings):
    """Queue a command to be registered on the next start."""
    name = normalize_name(args.name)
    store = _store(settings)
    snapshot = _load(store)
    _save(store, snapshot.model_copy(update={"new_command": name}))
    print(f"Queued {derive_address(name, settings.get('address_prefix'))} for registration.")


def cmd_remove(args, settings: Settings):
    """Drop a command from the snapshot."""
    name = normalize_name(args.name)
    store = _store(settings)
    snapshot = _load(store)
    kept = [e for e in snapshot.registered_commands if (e.command or "").strip() != name]
    if len(kept) == len(snapshot.registered_commands):
        raise NotFoundError(f"Command {name} not found")
    _save(store, snapshot.model_copy(update={"registered_commands": kept}))
    print(f"Removed {derive_address(name, settings.get('address_prefix'))}.")
    print("Restart the host to fully unregister its write handler.")


def cmd_config(args, settings: Settings):
    """Show settings, or set one."""
    manager = get_settings_manager()

    if args.action == "set":
        if not args.key or args.value is None:
            raise InvalidArgumentError("Usage: config set <key> <value>")
        try:
            manager.set(args.key, args.value)
        except ValueError as e:
            raise InvalidArgumentError(f"Invalid setting {args.key}: {e}") from e
        print(f"Set {args.key} = {manager.get(args.key)!r} in {manager.config_file}")
        return

    current = manager.load()
    print(f"\nSettings ({manager.config_file}):")
    for key in Settings.model_fields:
        marker = "" if getattr(current, key) is not None else "  (default)"
        print(f"  {key} = {current.get(key)!r}{marker}")
    print()


def cmd_reconcile(args, settings: Settings):
    """Start the registry against an in-memory host and show the result."""
    from command_registry.host import InMemoryHost
    from command_registry.plugin import CommandRegistryPlugin

    host = InMemoryHost()
    plugin = CommandRegistryPlugin(host, host, _store(settings), settings)
    report = plugin.start()
    try:
        registrations = plugin.service.list()
    finally:
        plugin.stop()

    if args.as_json:
        print(json.dumps({
            "commands": [r.model_dump() for r in registrations],
            "restored": report.restored,
            "pruned": report.pruned,
            "failed": report.failed,
            "pending": report.pending.model_dump(mode="json") if report.pending else None,
        }, indent=2))
        return

    print(f"\nRegistry ({len(registrations)} commands):")
    for r in registrations:
        print(f"  - {r.address}  (registered {r.registered_at})")
    if report.pending:
        print(f"\nPending command {report.pending.name}: {report.pending.outcome.value}")
    print()


def main():
    """Main entry point for the command-registry CLI."""
    parser = argparse.ArgumentParser(
        description="Administer the dynamic command registry",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    command-registry list                  List registered commands
    command-registry add captureWeather    Queue a command for the next start
    command-registry remove captureWeather Drop a command from the snapshot
    command-registry reconcile --json      Show the registry after startup
                                           (consumes and clears a queued newCommand)
    command-registry config set reset_delay 2.5
                                           Change a setting
        """,
    )
    parser.add_argument(
        "--options-file", metavar="PATH", help="Snapshot file (default from settings)"
    )
    parser.add_argument("--log-file", metavar="PATH", help="Also log to this file")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    list_parser = subparsers.add_parser("list", help="List registered commands")
    list_parser.add_argument(
        "--json", action="store_true", dest="as_json", help="Output as JSON"
    )
    list_parser.set_defaults(func=cmd_list)

    add_parser = subparsers.add_parser("add", help="Queue a command for registration")
    add_parser.add_argument("name", help="Command name (without the commands. prefix)")
    add_parser.set_defaults(func=cmd_add)

    remove_parser = subparsers.add_parser("remove", help="Remove a command")
    remove_parser.add_argument("name", help="Command name")
    remove_parser.set_defaults(func=cmd_remove)

    reconcile_parser = subparsers.add_parser(
        "reconcile",
        help="Run startup reconciliation and print the registry; "
             "a queued newCommand is registered and cleared from the snapshot",
        description="Restore and prune the registry from the snapshot file. A queued "
                    "newCommand is registered and cleared, so the snapshot file is rewritten.",
    )
    reconcile_parser.add_argument(
        "--json", action="store_true", dest="as_json", help="Output as JSON"
    )
    reconcile_parser.set_defaults(func=cmd_reconcile)

    config_parser = subparsers.add_parser("config", help="Show or set settings")
    config_parser.add_argument(
        "action", nargs="?", choices=["show", "set"], default="show", help="Action (default: show)"
    )
    config_parser.add_argument("key", nargs="?", help="Setting name")
    config_parser.add_argument("value", nargs="?", help="New value")
    config_parser.set_defaults(func=cmd_config)

    args = parser.parse_args()

    # Default to 'list' if no command given
    if args.command is None:
        args.command = "list"
        args.as_json = False
        args.func = cmd_list

    settings = _settings(args)
    configure_logging(verbose=args.verbose, log_file=settings.get("log_file"))

    try:
        args.func(args, settings)
    except InvalidArgumentError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except CommandRegistryError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
