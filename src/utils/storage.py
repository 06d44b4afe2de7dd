#!/usr/bin/env python3
"""
Campus AutoLogin - Settings Storage

Keeps the five login settings in a small JSON file in the app config folder
(see PathManager.get_config_dir()). The file is rewritten wholesale on every
save. Values are stored as-is; this is meant for convenience, not security.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from src.config.settings import SETTINGS_FILE
from src.models import SettingsRecord
from src.utils.system_utils import PathManager


class PersistenceError(Exception):
    """Settings could not be read or written"""

    pass


class SettingsStore:
    """JSON file backed store for SettingsRecord"""

    def __init__(self, path: Optional[Path] = None):
        self._path = path

    @property
    def path(self) -> Path:
        if self._path is None:
            return PathManager.get_config_dir() / SETTINGS_FILE
        return self._path

    def save_settings(self, record: SettingsRecord) -> None:
        """Overwrite the stored record

        The new file is written next to the old one and swapped in, so an
        interrupted save leaves the previous settings intact.
        """
        path = self.path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps(record.to_dict(), ensure_ascii=False, indent=2)

            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"Failed to save settings to {path}: {e}") from e

    def load_settings(self) -> SettingsRecord:
        """Read the stored record

        Raises PersistenceError when the file is missing, unreadable or not a JSON object.
        """
        path = self.path
        if not path.exists():
            raise PersistenceError(f"Settings file not found: {path}")

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Failed to read settings from {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Settings file is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise PersistenceError("Settings file does not contain a JSON object")

        return SettingsRecord.from_dict(data)

    def exists(self) -> bool:
        return self.path.exists()
