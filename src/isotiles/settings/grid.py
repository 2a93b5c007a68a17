"""
Grid-related settings for isotiles.
"""

import logging
from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

# Cells per side used when nothing is configured
DEFAULT_GRID_SIZE = 13


class GridSettings:
    """Manages grid extent, tile size and world scale."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_int(self, key: str, default: int = 0) -> int:
        """Type-safe integer retrieval from settings."""
        value = self.settings.value(key, default)
        try:
            if value is None:
                return default
            return int(cast(str | int, value))
        except (ValueError, TypeError):
            return default

    def _get_float(self, key: str, default: float = 0.0) -> float:
        """Type-safe float retrieval from settings."""
        value = self.settings.value(key, default)
        try:
            if value is None:
                return default
            return float(cast(str | float, value))
        except (ValueError, TypeError):
            return default

    @property
    def grid_size(self) -> int:
        """Get number of cells per grid side."""
        return self._get_int("grid/size", DEFAULT_GRID_SIZE)

    @grid_size.setter
    def grid_size(self, value: int) -> None:
        """Set number of cells per grid side."""
        if value > 0:
            self.settings.setValue("grid/size", value)
            self.settings.sync()
        else:
            logger.warning(f"Invalid grid size: {value}, keeping current: {self.grid_size}")

    @property
    def world_scale(self) -> float:
        """Get world scale multiplier."""
        return self._get_float("grid/world_scale", 1.0)

    @world_scale.setter
    def world_scale(self, value: float) -> None:
        """Set world scale multiplier."""
        if value > 0:
            self.settings.setValue("grid/world_scale", value)
            self.settings.sync()
        else:
            logger.warning(f"Invalid world scale: {value}, keeping current: {self.world_scale}")

    @property
    def tile_width(self) -> int:
        """Get default tile width in pixels."""
        return self._get_int("grid/tile_width", 16)

    @tile_width.setter
    def tile_width(self, value: int) -> None:
        """Set default tile width in pixels."""
        self.settings.setValue("grid/tile_width", value)
        self.settings.sync()

    @property
    def tile_height(self) -> int:
        """Get default tile height in pixels."""
        return self._get_int("grid/tile_height", 16)

    @tile_height.setter
    def tile_height(self, value: int) -> None:
        """Set default tile height in pixels."""
        self.settings.setValue("grid/tile_height", value)
        self.settings.sync()
