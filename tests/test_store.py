#!/usr/bin/env python3
"""
Tests for the in-memory command store.
"""

import pytest

from command_registry.core import CommandRegistration, CommandStore, InvalidArgumentError
from command_registry.core.helpers import derive_address, normalize_name


# ============================================================================
# Helper Tests
# ============================================================================

class TestHelpers:
    """Tests for name normalisation and address derivation."""

    def test_derive_address(self):
        """Test address is prefix plus name."""
        assert derive_address("capture") == "commands.capture"
        assert derive_address("capture", "cmd") == "cmd.capture"

    def test_normalize_trims(self):
        """Test surrounding whitespace is removed."""
        assert normalize_name("  weather ") == "weather"

    @pytest.mark.parametrize("bad", ["", "   ", None, 42])
    def test_normalize_rejects_empty(self, bad):
        """Test empty, blank and non-string names are rejected."""
        with pytest.raises(InvalidArgumentError):
            normalize_name(bad)


# ============================================================================
# CommandStore Tests
# ============================================================================

class TestCommandStore:
    """Tests for CommandStore."""

    def test_add_then_contains(self, store):
        """Test an added command is reachable by its address."""
        assert store.add("capture") is True
        assert store.contains("commands.capture")
        assert "commands.capture" in store
        assert len(store) == 1

    def test_add_existing_is_noop(self, store):
        """Test adding an existing address does not overwrite it."""
        store.add("capture", "2024-01-01T00:00:00.000Z")
        assert store.add("capture", "2025-01-01T00:00:00.000Z") is False

        entry = store.get("commands.capture")
        assert entry.registered_at == "2024-01-01T00:00:00.000Z"
        assert len(store) == 1

    def test_add_sets_registered_at_when_missing(self, store):
        """Test a timestamp is assigned when none is given."""
        store.add("capture")
        assert store.get("commands.capture").registered_at.endswith("Z")

    def test_add_rejects_blank_name(self, store):
        """Test blank names never reach the store."""
        with pytest.raises(InvalidArgumentError):
            store.add("  ")
        assert len(store) == 0

    def test_entry_key_matches_name(self, store):
        """Test the key of every entry is derived from its name."""
        store.add(" weather ")
        entry = store.list()[0]
        assert entry.name == "weather"
        assert entry.address == "commands.weather"
        assert store.addresses() == ["commands.weather"]

    def test_remove(self, store):
        """Test removal reports whether anything was deleted."""
        store.add("capture")
        assert store.remove("commands.capture") is True
        assert store.remove("commands.capture") is False
        assert not store.contains("commands.capture")

    def test_list_is_a_copy(self, store):
        """Test mutating the listing does not touch the store."""
        store.add("a")
        listing = store.list()
        listing.clear()
        assert len(store) == 1

    def test_entries_are_immutable(self, store):
        """Test registrations cannot be changed in place."""
        store.add("a")
        entry = store.get("commands.a")
        with pytest.raises(Exception):
            entry.registered_at = "later"

    def test_clear(self, store):
        """Test clear empties the store."""
        store.add("a")
        store.add("b")
        store.clear()
        assert store.list() == []

    def test_custom_prefix(self):
        """Test a store with a different address prefix."""
        store = CommandStore("controls")
        store.add("lights")
        assert store.contains("controls.lights")
        assert isinstance(store.get("controls.lights"), CommandRegistration)
