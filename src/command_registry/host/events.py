"""
Event models published to the host bus.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from command_registry.utils.timestamps import utc_now


class PathValue(BaseModel):
    path: str
    value: Any


class MetaValue(BaseModel):
    units: str
    description: str


class PathMeta(BaseModel):
    path: str
    value: MetaValue


class CommandEvent(BaseModel):
    """A value update, optionally carrying metadata for the same paths."""

    context: str
    source_label: str
    timestamp: str = Field(default_factory=utc_now)
    values: list[PathValue] = Field(default_factory=list)
    meta: Optional[list[PathMeta]] = None

    def to_delta(self) -> dict[str, Any]:
        """Convert to the host's delta message format."""
        update: dict[str, Any] = {
            "source": {"label": self.source_label},
            "timestamp": self.timestamp,
            "values": [v.model_dump() for v in self.values],
        }
        if self.meta:
            update["meta"] = [m.model_dump() for m in self.meta]
        return {"context": self.context, "updates": [update]}


def value_event(
    context: str,
    source_label: str,
    path: str,
    value: Any,
    units: Optional[str] = None,
    description: Optional[str] = None,
) -> CommandEvent:
    """Build a single-path event, with metadata when units are given."""
    meta = None
    if units is not None:
        meta = [PathMeta(path=path, value=MetaValue(units=units, description=description or ""))]
    return CommandEvent(
        context=context,
        source_label=source_label,
        values=[PathValue(path=path, value=value)],
        meta=meta,
    )
