"""
Core settings management for isotiles.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from PySide6.QtCore import QSettings

from .types import ConfigError, ValidationResult
from .validation import SettingsValidator
from .grid import GridSettings
from .logging import LoggingSettings

logger = logging.getLogger(__name__)


class AppSettings:
    """
    Configuration management using QSettings.

    Provides type-safe access to application settings with automatic
    cross-platform storage and validation.
    """

    def __init__(
        self,
        profile: str = "default",
        settings_file: Optional[Union[str, Path]] = None,
    ):
        """Initialize settings with organization, application name, and profile.

        Args:
            profile: Settings profile name (default: "default")
            settings_file: Optional INI file used instead of the platform store
        """
        if settings_file is not None:
            self.settings = QSettings(str(settings_file), QSettings.Format.IniFormat)
        else:
            self.settings = QSettings("isotiles", "isotiles")
        self.profile = profile

        if self.settings.status() != QSettings.Status.NoError:
            raise ConfigError(f"Cannot access settings at {self.settings.fileName()}")

        # Use profile as a group to create hierarchy: isotiles/isotiles/default/...
        self.settings.beginGroup(profile)

        # Initialize subsystems
        self._validator = SettingsValidator(self)
        self._grid = GridSettings(self.settings)
        self._logging = LoggingSettings(self.settings)

        logger.debug(
            f"Settings initialized for profile '{profile}', stored at: {self.settings.fileName()}"
        )

    # === SUBSYSTEM ACCESS ===

    @property
    def grid(self) -> GridSettings:
        """Access grid settings subsystem."""
        return self._grid

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    # === GRID SETTINGS (DELEGATED) ===

    @property
    def grid_size(self) -> int:
        """Get number of cells per grid side."""
        return self._grid.grid_size

    @grid_size.setter
    def grid_size(self, value: int) -> None:
        """Set number of cells per grid side."""
        self._grid.grid_size = value

    @property
    def world_scale(self) -> float:
        """Get world scale multiplier."""
        return self._grid.world_scale

    @world_scale.setter
    def world_scale(self, value: float) -> None:
        """Set world scale multiplier."""
        self._grid.world_scale = value

    @property
    def tile_width(self) -> int:
        """Get default tile width."""
        return self._grid.tile_width

    @tile_width.setter
    def tile_width(self, value: int) -> None:
        """Set default tile width."""
        self._grid.tile_width = value

    @property
    def tile_height(self) -> int:
        """Get default tile height."""
        return self._grid.tile_height

    @tile_height.setter
    def tile_height(self, value: int) -> None:
        """Set default tile height."""
        self._grid.tile_height = value

    # === LOGGING SETTINGS (DELEGATED) ===

    @property
    def console_logging(self) -> bool:
        """Check if console logging is enabled."""
        return self._logging.console_logging

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        """Set console logging enabled state."""
        self._logging.console_logging = value

    @property
    def console_log_level(self) -> str:
        """Get console logging level."""
        return self._logging.console_log_level

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        """Set console logging level."""
        self._logging.console_log_level = value

    @property
    def console_use_colors(self) -> bool:
        """Check if console should use colors."""
        return self._logging.console_use_colors

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        """Set console color usage."""
        self._logging.console_use_colors = value

    @property
    def file_logging(self) -> bool:
        """Check if file logging is enabled."""
        return self._logging.file_logging

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        """Set file logging enabled state."""
        self._logging.file_logging = value

    @property
    def log_file_path(self) -> str:
        """Get log file path."""
        return self._logging.log_file_path

    @log_file_path.setter
    def log_file_path(self, value: str) -> None:
        """Set log file path."""
        self._logging.log_file_path = value

    @property
    def log_file_absolute_path(self) -> Path:
        """Get absolute path to log file."""
        return self._logging.log_file_absolute_path

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    # === UTILITY METHODS ===

    def get_settings_file_path(self) -> str:
        """Get the file path where settings are stored."""
        return self.settings.fileName()

    def sync(self) -> None:
        """Force synchronization of settings to storage."""
        self.settings.sync()
