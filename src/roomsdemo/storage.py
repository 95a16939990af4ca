from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from platformdirs import PlatformDirs

from .errors import InvalidArgument

logger = logging.getLogger(__name__)

APP_NAME = "RoomsDemo"
PREFS_FILENAME = "prefs.json"

# Environment variable override (useful for tests and power users)
ENV_CONFIG_DIR = "ROOMS_CONFIG_DIR"


class PrefsStore(ABC):
    """Durable integer key/value cells shared between sessions.

    Writes made with ``set`` only have to survive a restart once ``flush`` has
    been called.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[int]:
        """Return the stored value, or None when the key was never written."""
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def flush(self) -> None:
        """Persist pending writes."""
        raise NotImplementedError

    def get_int(self, key: str, default: int = 0) -> int:
        value = self.get(key)
        return default if value is None else value


def _check_int(key: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"Preference {key!r} must be an int, got {type(value).__name__}")
    return value


class MemoryPrefsStore(PrefsStore):
    """Process-local store; nothing outlives the interpreter."""

    def __init__(self, initial: Optional[Dict[str, int]] = None) -> None:
        self._values: Dict[str, int] = dict(initial or {})
        self.flush_count = 0

    def get(self, key: str) -> Optional[int]:
        return self._values.get(key)

    def set(self, key: str, value: int) -> None:
        self._values[key] = _check_int(key, value)

    def flush(self) -> None:
        self.flush_count += 1


def default_config_dir(app_name: str = APP_NAME) -> Path:
    override = os.getenv(ENV_CONFIG_DIR)
    if override:
        return Path(override).expanduser().resolve()
    return Path(PlatformDirs(appname=app_name, appauthor=False).user_config_dir).expanduser().resolve()


class JsonPrefsStore(PrefsStore):
    """Preferences kept in a JSON object under the user config directory.

    - Loaded once at construction; a missing file is an empty store
    - A corrupt or non-object file is logged and treated as empty
    - Only int values are kept; anything else found on disk is dropped
    """

    def __init__(self, config_dir: Optional[Path] = None, filename: str = PREFS_FILENAME) -> None:
        self.config_dir = Path(config_dir) if config_dir else default_config_dir()
        self.prefs_file = self.config_dir / filename
        self._values: Dict[str, int] = {}
        self._dirty = False
        self.load()

    def load(self) -> None:
        self._values = {}
        if not self.prefs_file.exists():
            logger.debug("No preferences file at %s", self.prefs_file)
            return
        try:
            content = json.loads(self.prefs_file.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.exception("Failed to read preferences from %s; starting empty", self.prefs_file)
            return
        if not isinstance(content, dict):
            logger.warning("Preferences file %s is not a JSON object; ignoring it", self.prefs_file)
            return
        for key, value in content.items():
            if isinstance(value, int) and not isinstance(value, bool):
                self._values[str(key)] = value
            else:
                logger.warning("Dropping non-integer preference %r=%r", key, value)
        logger.info("Preferences loaded from %s", self.prefs_file)

    def get(self, key: str) -> Optional[int]:
        return self._values.get(key)

    def set(self, key: str, value: int) -> None:
        self._values[key] = _check_int(key, value)
        self._dirty = True

    def flush(self) -> None:
        if not self._dirty and self.prefs_file.exists():
            return
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.prefs_file.write_text(json.dumps(self._values, indent=2, sort_keys=True), encoding="utf-8")
        self._dirty = False
        logger.info("Preferences saved to %s", self.prefs_file)
