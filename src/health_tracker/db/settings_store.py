"""Small key/value settings kept outside the record store."""

import json
from pathlib import Path

import structlog

from ..config import get_settings

logger = structlog.get_logger()

ACTIVE_PROGRAM_KEY = "activeProgramId"


class SettingsFile:
    """JSON file of named values."""

    def __init__(self, path: Path | None = None):
        self.path = path or get_settings().settings_path

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            return json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to read settings", path=str(self.path), error=str(e))
            return {}

    def get(self, key: str):
        return self._load().get(key)

    def set(self, key: str, value) -> None:
        data = self._load()
        if value is None:
            data.pop(key, None)
        else:
            data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2))


class ActiveProgramSetting:
    """Pointer to the program currently being followed."""

    def __init__(self, settings_file: SettingsFile | None = None):
        self.settings_file = settings_file or SettingsFile()

    def get(self) -> str | None:
        return self.settings_file.get(ACTIVE_PROGRAM_KEY)

    def set(self, program_id: str | None) -> None:
        self.settings_file.set(ACTIVE_PROGRAM_KEY, program_id)

    def clear(self) -> None:
        self.set(None)
