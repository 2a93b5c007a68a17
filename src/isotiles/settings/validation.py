"""
Settings validation system for isotiles.
"""

import logging
from typing import List, TYPE_CHECKING

from .logging import VALID_LEVELS
from .types import ValidationResult

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        # Validate grid
        if self.settings.grid_size <= 0:
            errors.append(f"Grid size must be positive: {self.settings.grid_size}")
        if self.settings.world_scale <= 0:
            errors.append(f"World scale must be positive: {self.settings.world_scale}")
        if self.settings.tile_width <= 0 or self.settings.tile_height <= 0:
            errors.append(
                f"Tile size must be positive: "
                f"{self.settings.tile_width}x{self.settings.tile_height}"
            )

        # Validate logging
        if self.settings.console_log_level.upper() not in VALID_LEVELS:
            warnings.append(
                f"Unknown console log level '{self.settings.console_log_level}', INFO will be used"
            )

        if errors:
            logger.debug(f"Settings validation failed with {len(errors)} error(s)")

        return ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
