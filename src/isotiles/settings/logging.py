"""
Console and file logging options for isotiles.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

LOG_FILE_PATH = "logs/isotiles.csv"
VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

CONSOLE_ENABLED_KEY = "logging/console_enabled"
CONSOLE_LEVEL_KEY = "logging/console_level"
CONSOLE_COLORS_KEY = "logging/console_use_colors"
FILE_ENABLED_KEY = "logging/file_enabled"
FILE_PATH_KEY = "logging/file_path"


class LoggingSettings:
    """Logging options stored under the `logging/` keys."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _flag(self, key: str, default: bool) -> bool:
        # INI files hand booleans back as strings
        value = self.settings.value(key, default)
        if value is None:
            return default
        if isinstance(value, str):
            return value.strip().lower() in ("true", "1", "yes")
        return bool(value)

    def _text(self, key: str, default: str) -> str:
        value = self.settings.value(key, default)
        return default if value is None else str(value)

    def _store(self, key: str, value: Any) -> None:
        self.settings.setValue(key, value)
        self.settings.sync()

    # === CONSOLE ===

    @property
    def console_logging(self) -> bool:
        """Whether records are written to the console (on by default)."""
        return self._flag(CONSOLE_ENABLED_KEY, True)

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        self._store(CONSOLE_ENABLED_KEY, value)

    @property
    def console_log_level(self) -> str:
        """Lowest level shown on the console."""
        return self._text(CONSOLE_LEVEL_KEY, "INFO")

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        level = value.upper()
        if level not in VALID_LEVELS:
            logger.warning(f"Ignoring unknown console log level '{value}'")
            return
        self._store(CONSOLE_LEVEL_KEY, level)

    @property
    def console_use_colors(self) -> bool:
        return self._flag(CONSOLE_COLORS_KEY, True)

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        self._store(CONSOLE_COLORS_KEY, value)

    # === FILE ===

    @property
    def file_logging(self) -> bool:
        """Whether a rotating CSV log file is written (off by default)."""
        return self._flag(FILE_ENABLED_KEY, False)

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        self._store(FILE_ENABLED_KEY, value)

    @property
    def log_file_path(self) -> str:
        return self._text(FILE_PATH_KEY, LOG_FILE_PATH)

    @log_file_path.setter
    def log_file_path(self, value: str) -> None:
        self._store(FILE_PATH_KEY, value)

    @property
    def log_file_absolute_path(self) -> Path:
        return Path(self.log_file_path).resolve()
