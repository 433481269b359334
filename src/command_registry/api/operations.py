"""
Transport-agnostic request operations for the command registry.

Each operation takes already-parsed request data and returns an
ApiResponse carrying a status code and a JSON-ready body, so any HTTP
layer only has to route and serialize.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel, Field

from command_registry.core.exceptions import InvalidArgumentError, RegistrationFailedError
from command_registry.core.service import RegistrationService
from command_registry.logging import log_exception

logger = logging.getLogger(__name__)


class ApiResponse(BaseModel):
    status_code: int = 200
    body: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status_code < 400


class RegisterCommandRequest(BaseModel):
    command: Optional[Any] = None

    model_config = {"extra": "ignore"}


def _error(status_code: int, message: str, **extra: Any) -> ApiResponse:
    return ApiResponse(status_code=status_code, body={"error": message, **extra})


class CommandApi:
    """Register, list and remove operations over a RegistrationService."""

    def __init__(self, service: RegistrationService):
        self.service = service

    def register_command(self, body: Any) -> ApiResponse:
        """Handle a register request body of the form {"command": name}."""
        try:
            if not isinstance(body, dict):
                return _error(400, "Command name required")
            request = RegisterCommandRequest.model_validate(body)
            result = self.service.register(request.command)
            if result.registered:
                message = f"Command {result.name} registered successfully"
            else:
                message = f"Command {result.name} already registered"
            return ApiResponse(body={
                "success": True,
                "message": message,
                "path": result.address,
            })
        except InvalidArgumentError:
            return _error(400, "Command name required")
        except RegistrationFailedError as e:
            log_exception(e, "Error registering command", include_traceback=False)
            return _error(500, "Failed to register command")
        except Exception as e:
            log_exception(e, "Error registering command")
            return _error(500, "Failed to register command")

    def list_commands(self) -> ApiResponse:
        try:
            addresses = [r.address for r in self.service.list()]
        except Exception as e:
            log_exception(e, "Error listing commands")
            return _error(500, "Failed to list commands")
        return ApiResponse(body={"commands": addresses, "count": len(addresses)})

    def remove_command(self, command: Any) -> ApiResponse:
        """Handle a remove request for the named command."""
        try:
            result = self.service.unregister(command)
            if not result.removed:
                return _error(404, f"Command {result.name} not found", path=result.address)
            return ApiResponse(body={
                "success": True,
                "message": f"Command {result.name} removed successfully",
                "path": result.address,
            })
        except Exception as e:
            log_exception(e, "Error removing command")
            return _error(500, "Failed to remove command")
