#!/usr/bin/env python3
"""
Tests for the transport-agnostic request operations.
"""

import logging
from unittest.mock import patch

import pytest

from command_registry.api import CommandApi


@pytest.fixture
def api(service):
    return CommandApi(service)


# ============================================================================
# RegisterCommand Tests
# ============================================================================

class TestRegisterCommand:
    """Tests for CommandApi.register_command()."""

    def test_register_success(self, api):
        """Test a new command returns success and its path."""
        response = api.register_command({"command": "captureWeather"})

        assert response.status_code == 200
        assert response.body == {
            "success": True,
            "message": "Command captureWeather registered successfully",
            "path": "commands.captureWeather",
        }

    def test_register_already_registered(self, api):
        """Test a repeated registration is still a success."""
        api.register_command({"command": "capture"})
        response = api.register_command({"command": "capture"})

        assert response.status_code == 200
        assert response.body["success"] is True
        assert response.body["message"] == "Command capture already registered"
        assert response.body["path"] == "commands.capture"

    @pytest.mark.parametrize("body", [{}, {"command": ""}, {"command": "  "}, {"command": 5}, None, "capture"])
    def test_register_bad_request(self, api, service, body):
        """Test missing or unusable names are client errors."""
        response = api.register_command(body)

        assert response.status_code == 400
        assert response.body == {"error": "Command name required"}
        assert service.list() == []

    def test_register_host_failure(self, api, host, service):
        """Test a host failure maps to a server error."""
        with patch.object(host, "install", side_effect=RuntimeError("host down")):
            response = api.register_command({"command": "capture"})

        assert response.status_code == 500
        assert response.body == {"error": "Failed to register command"}
        assert service.list() == []

    def test_register_unexpected_error(self, api, service, caplog):
        """Test unexpected exceptions are caught and logged."""
        with patch.object(service, "register", side_effect=KeyError("boom")):
            with caplog.at_level(logging.ERROR, logger="command_registry"):
                response = api.register_command({"command": "capture"})

        assert response.status_code == 500
        assert not response.ok
        assert "Traceback" in caplog.text


# ============================================================================
# ListCommands Tests
# ============================================================================

class TestListCommands:
    """Tests for CommandApi.list_commands()."""

    def test_list_empty(self, api):
        """Test listing an empty registry."""
        response = api.list_commands()
        assert response.body == {"commands": [], "count": 0}

    def test_list_addresses(self, api):
        """Test listing returns addresses and a count."""
        api.register_command({"command": "a"})
        api.register_command({"command": "b"})

        response = api.list_commands()
        assert response.status_code == 200
        assert sorted(response.body["commands"]) == ["commands.a", "commands.b"]
        assert response.body["count"] == 2


# ============================================================================
# RemoveCommand Tests
# ============================================================================

class TestRemoveCommand:
    """Tests for CommandApi.remove_command()."""

    def test_remove_existing(self, api):
        """Test removing a registered command."""
        api.register_command({"command": "capture"})
        response = api.remove_command("capture")

        assert response.status_code == 200
        assert response.body == {
            "success": True,
            "message": "Command capture removed successfully",
            "path": "commands.capture",
        }
        assert api.list_commands().body["count"] == 0

    def test_remove_missing(self, api):
        """Test removing an unknown command is a 404."""
        response = api.remove_command("ghost")

        assert response.status_code == 404
        assert response.body == {"error": "Command ghost not found", "path": "commands.ghost"}

    def test_remove_unexpected_error(self, api, service):
        """Test unexpected exceptions map to a server error."""
        with patch.object(service, "unregister", side_effect=RuntimeError("boom")):
            response = api.remove_command("capture")

        assert response.status_code == 500
        assert response.body == {"error": "Failed to remove command"}
