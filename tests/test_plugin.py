#!/usr/bin/env python3
"""
Tests for the plugin lifecycle, end to end against a JSON snapshot.
"""

import json

import pytest

from command_registry import CommandRegistryPlugin, JsonConfigStore, RegistryNotStartedError
from command_registry.core import PersistedSnapshot
from command_registry.host import InMemoryConfigStore, InMemoryHost

from conftest import FakeScheduler


@pytest.fixture
def options_file(tmp_path):
    return tmp_path / "options.json"


def make_plugin(host, config_store):
    return CommandRegistryPlugin(host, host, config_store, scheduler=FakeScheduler())


# ============================================================================
# Lifecycle Tests
# ============================================================================

class TestLifecycle:
    """Tests for start() and stop()."""

    def test_metadata(self):
        """Test the plugin identifies itself."""
        assert CommandRegistryPlugin.id == "command-registry"
        assert CommandRegistryPlugin.description

    def test_not_started(self, host):
        """Test using the plugin before start() raises."""
        plugin = make_plugin(host, InMemoryConfigStore())
        assert not plugin.running
        with pytest.raises(RegistryNotStartedError):
            plugin.service
        with pytest.raises(RegistryNotStartedError):
            plugin.api

    def test_start_without_snapshot(self, host):
        """Test starting with nothing persisted gives an empty registry."""
        plugin = make_plugin(host, InMemoryConfigStore())
        plugin.start()

        assert plugin.running
        assert plugin.api.list_commands().body == {"commands": [], "count": 0}

    def test_start_with_explicit_options(self, host):
        """Test options passed to start() win over the config store."""
        config_store = InMemoryConfigStore({"registeredCommands": [{"command": "stored"}]})
        plugin = make_plugin(host, config_store)
        plugin.start({"registeredCommands": [{"command": "given"}]})

        assert [r.name for r in plugin.service.list()] == ["given"]

    def test_start_with_snapshot_object(self, host):
        """Test a PersistedSnapshot can be passed directly."""
        plugin = make_plugin(host, InMemoryConfigStore())
        plugin.start(PersistedSnapshot.from_options({"registeredCommands": [{"command": "a"}]}))
        assert plugin.service.get("a").address == "commands.a"

    def test_stop_clears_memory_only(self, host, options_file):
        """Test stop() empties the registry without touching the snapshot."""
        options_file.write_text(json.dumps({"registeredCommands": [{"command": "capture"}]}))
        plugin = make_plugin(host, JsonConfigStore(options_file))
        plugin.start()
        store = plugin.store
        before = options_file.read_text()

        plugin.stop()

        assert len(store) == 0
        assert not plugin.running
        assert options_file.read_text() == before

    def test_restart_restores_registry(self, options_file):
        """Test commands registered in one run are restored in the next."""
        first_host = InMemoryHost()
        plugin = make_plugin(first_host, JsonConfigStore(options_file))
        plugin.start()
        plugin.api.register_command({"command": "capture"})
        plugin.stop()

        second_host = InMemoryHost()
        plugin = make_plugin(second_host, JsonConfigStore(options_file))
        report = plugin.start()

        assert report.restored == ["commands.capture"]
        assert second_host.installed_addresses() == ["commands.capture"]

    def test_removed_command_not_reinstalled(self, options_file):
        """Test a removed command is gone after restart."""
        plugin = make_plugin(InMemoryHost(), JsonConfigStore(options_file))
        plugin.start()
        plugin.api.register_command({"command": "a"})
        plugin.api.register_command({"command": "b"})
        plugin.api.remove_command("a")
        plugin.stop()

        host = InMemoryHost()
        plugin = make_plugin(host, JsonConfigStore(options_file))
        plugin.start()

        assert host.installed_addresses() == ["commands.b"]


# ============================================================================
# Pending Command Tests
# ============================================================================

class TestPendingCommandEndToEnd:
    """The administrative newCommand is consumed at startup."""

    def test_pending_consumed(self, host, options_file):
        """Test newCommand is registered and removed from the file."""
        options_file.write_text(json.dumps({"newCommand": "weather"}))
        plugin = make_plugin(host, JsonConfigStore(options_file))
        plugin.start()

        assert plugin.service.get("weather").address == "commands.weather"
        data = json.loads(options_file.read_text())
        assert "newCommand" not in data
        assert [c["command"] for c in data["registeredCommands"]] == ["weather"]
        assert data["registeredCommands"][0]["path"] == "commands.weather"

    def test_unknown_options_survive(self, host, options_file):
        """Test option keys the registry does not own are preserved."""
        options_file.write_text(json.dumps({"newCommand": "weather", "enabled": True}))
        plugin = make_plugin(host, JsonConfigStore(options_file))
        plugin.start()

        assert json.loads(options_file.read_text())["enabled"] is True


# ============================================================================
# Malformed Snapshot Tests
# ============================================================================

class TestMalformedSnapshot:
    """Bad entries are skipped; the rest of the snapshot is restored."""

    def test_non_string_command_in_options(self, host):
        """Test an entry with a non-string command does not block startup."""
        plugin = make_plugin(host, InMemoryConfigStore())
        report = plugin.start({"registeredCommands": [{"command": "good"}, {"command": 5}]})

        assert report.restored == ["commands.good"]
        assert host.installed_addresses() == ["commands.good"]

    def test_non_object_entry_in_file(self, host, options_file):
        """Test a non-object entry in the file is skipped."""
        options_file.write_text(json.dumps({"registeredCommands": [{"command": "good"}, "junk", 7]}))
        plugin = make_plugin(host, JsonConfigStore(options_file))
        plugin.start()

        assert [r.address for r in plugin.service.list()] == ["commands.good"]

    def test_malformed_entries_dropped_on_rewrite(self, host, options_file):
        """Test the next snapshot write no longer carries the bad entries."""
        options_file.write_text(json.dumps({
            "registeredCommands": [{"command": "good"}, ["nested"]],
            "newCommand": "weather",
        }))
        plugin = make_plugin(host, JsonConfigStore(options_file))
        plugin.start()

        data = json.loads(options_file.read_text())
        assert sorted(c["command"] for c in data["registeredCommands"]) == ["good", "weather"]
