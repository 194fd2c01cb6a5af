"""JSON-file persistence of ForgeData, one document per user."""

from __future__ import annotations

import json
import logging
import os
import re
from datetime import date
from pathlib import Path

from forge_engine.exceptions import MalformedPlanError
from forge_engine.models.forge_data import ForgeData
from forge_engine.serialization.forge_json import (
    forge_data_from_dict,
    forge_data_to_dict,
)

from forge_app.exceptions import StoreError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")


class ForgeStore:
    """Reads and writes ``<data_dir>/<user_id>.json`` documents."""

    def __init__(self, data_dir: Path | str) -> None:
        self._data_dir = Path(data_dir).expanduser()

    def path_for(self, user_id: str) -> Path:
        safe = _UNSAFE_CHARS.sub("_", user_id.strip()) or "default"
        return self._data_dir / f"{safe}.json"

    def exists(self, user_id: str) -> bool:
        return self.path_for(user_id).exists()

    def load(self, user_id: str, today: date) -> ForgeData | None:
        """Load a user's document, or None if nothing is stored.

        A stored plan that fails validation is dropped (logged) so the
        caller regenerates it instead of displaying a broken week.

        Raises:
            StoreError: If the file cannot be read or parsed.
        """
        path = self.path_for(user_id)
        if not path.exists():
            return None
        try:
            with open(path) as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"Could not read {path}: {exc}") from exc

        try:
            return forge_data_from_dict(raw, today=today)
        except MalformedPlanError as exc:
            logger.warning("Stored plan for %s is malformed, dropping it: %s", user_id, exc)
            raw = dict(raw, plan=None)
        except (KeyError, TypeError, ValueError) as exc:
            raise StoreError(f"Invalid document at {path}: {exc}") from exc
        try:
            return forge_data_from_dict(raw, today=today)
        except (KeyError, TypeError, ValueError) as exc:
            raise StoreError(f"Invalid document at {path}: {exc}") from exc

    def save(self, user_id: str, data: ForgeData) -> Path:
        """Write atomically (temp file + rename). Returns the path written."""
        path = self.path_for(user_id)
        tmp = path.with_suffix(".json.tmp")
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w") as f:
                json.dump(forge_data_to_dict(data), f, indent=2)
            os.replace(tmp, path)
        except OSError as exc:
            raise StoreError(f"Could not write {path}: {exc}") from exc
        logger.debug("Saved forge data for %s to %s", user_id, path)
        return path

    def delete(self, user_id: str) -> None:
        path = self.path_for(user_id)
        if path.exists():
            path.unlink()
            logger.info("Deleted forge data for %s", user_id)
