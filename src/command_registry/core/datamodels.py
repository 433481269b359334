"""
Data models for the command registry.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from command_registry.utils.timestamps import utc_now

logger = logging.getLogger(__name__)


class CommandRegistration(BaseModel):
    """One entry in the registry. Write-once."""

    name: str
    address: str
    registered_at: str = Field(default_factory=utc_now)

    model_config = {"frozen": True}


class RegisterOutcome(str, Enum):
    REGISTERED = "registered"
    ALREADY_REGISTERED = "already_registered"


class UnregisterOutcome(str, Enum):
    REMOVED = "removed"
    NOT_FOUND = "not_found"


class RegisterResult(BaseModel):
    """Result of a register call."""

    outcome: RegisterOutcome
    name: str
    address: str

    @property
    def registered(self) -> bool:
        return self.outcome is RegisterOutcome.REGISTERED


class UnregisterResult(BaseModel):
    """Result of an unregister call."""

    outcome: UnregisterOutcome
    name: str
    address: str

    @property
    def removed(self) -> bool:
        return self.outcome is UnregisterOutcome.REMOVED


class PutResult(BaseModel):
    """Completion result returned to the host by a write handler."""

    state: str = "COMPLETED"
    status_code: int = 200

    def to_dict(self) -> dict[str, Any]:
        return {"state": self.state, "statusCode": self.status_code}


class PersistedCommand(BaseModel):
    """A registration as stored in the persisted options."""

    command: Optional[str] = None
    path: Optional[str] = None
    registered: Optional[str] = None

    model_config = {"extra": "ignore"}

    @classmethod
    def from_registration(cls, registration: CommandRegistration) -> PersistedCommand:
        return cls(
            command=registration.name,
            path=registration.address,
            registered=registration.registered_at,
        )


class PersistedSnapshot(BaseModel):
    """Last known-good registry state plus an optional pending registration.

    Unknown option keys are kept so that rewriting the snapshot never
    drops settings owned by somebody else.
    """

    registered_commands: list[PersistedCommand] = Field(
        default_factory=list, alias="registeredCommands"
    )
    new_command: Optional[str] = Field(default=None, alias="newCommand")

    model_config = {"extra": "allow", "populate_by_name": True}

    @field_validator("registered_commands", mode="before")
    @classmethod
    def _drop_malformed_entries(cls, value):
        if value is None:
            return []
        if not isinstance(value, list):
            logger.warning(f"Ignoring registeredCommands that is not a list: {value!r}")
            return []
        entries = []
        for item in value:
            try:
                entries.append(PersistedCommand.model_validate(item))
            except ValidationError:
                logger.warning(f"Ignoring malformed persisted entry: {item!r}")
        return entries

    @field_validator("new_command", mode="before")
    @classmethod
    def _non_string_pending_as_none(cls, value):
        if value is not None and not isinstance(value, str):
            logger.warning(f"Ignoring newCommand that is not a string: {value!r}")
            return None
        return value

    @property
    def pending_name(self) -> Optional[str]:
        """The queued registration, or None if absent or blank."""
        if isinstance(self.new_command, str) and self.new_command.strip():
            return self.new_command.strip()
        return None

    @classmethod
    def from_options(cls, options: Optional[dict[str, Any]]) -> PersistedSnapshot:
        return cls.model_validate(options or {})

    def to_options(self) -> dict[str, Any]:
        """Wire form: registeredCommands, newCommand (if set) and extra keys."""
        data = self.model_dump(by_alias=True)
        if data.get("newCommand") is None:
            data.pop("newCommand", None)
        for entry in data["registeredCommands"]:
            for key in [k for k, v in entry.items() if v is None]:
                del entry[key]
        return data
