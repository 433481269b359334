"""JSON file store for the persisted registry snapshot."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from pydantic import ValidationError

from command_registry.core.datamodels import PersistedSnapshot
from command_registry.core.exceptions import ConfigStoreError

if TYPE_CHECKING:
    from command_registry.host.interfaces import SaveCallback

logger = logging.getLogger(__name__)


class JsonConfigStore:
    """Reads and writes the snapshot as a JSON document."""

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def load(self) -> Optional[PersistedSnapshot]:
        """Load the snapshot. Returns None if the file does not exist."""
        if not self.path.exists():
            return None

        try:
            data = json.loads(self.path.read_text() or "{}")
        except json.JSONDecodeError as e:
            raise ConfigStoreError(f"Invalid JSON in {self.path}: {e}") from e
        except OSError as e:
            raise ConfigStoreError(f"Cannot read {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigStoreError(f"Expected a JSON object in {self.path}")

        try:
            return PersistedSnapshot.from_options(data)
        except ValidationError as e:
            raise ConfigStoreError(f"Invalid snapshot in {self.path}: {e}") from e

    def save(self, snapshot: PersistedSnapshot, callback: SaveCallback) -> None:
        """Write the snapshot, reporting the outcome through callback."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(snapshot.to_options(), indent=2) + "\n")
            tmp_path.replace(self.path)
        except OSError as e:
            callback(e)
            return
        logger.debug(f"Wrote snapshot to {self.path}")
        callback(None)
