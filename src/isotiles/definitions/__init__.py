"""
Definitions package for isotiles.

Provides the authoring data model for tilesets and tilemaps, the builders
that validate it, and the loader that reads and writes definition files.
"""

from .models import (
    TileSize, ImageDimensions, TilePosition, SourceDefinition,
    StandardTile, AnimatedTile, TileDefinition, TilesetDefinition,
    TilesetLink, TileIdentifier, LayerDefinition, TilemapDefinition,
    EMPTY_TILE,
)
from .builders import (
    AnimatedTileDefBuilder, TilesetDefinitionBuilder, TilemapDefinitionBuilder
)
from .errors import (
    TilesetValidationError, DuplicatedTileIds, DuplicatedTilePositions,
    InvalidName, TileOutOfBounds, BuilderConsumedError, DefinitionFormatError,
)
from .loader import DefinitionLoader

__all__ = [
    # Value types
    'TileSize',
    'ImageDimensions',
    'TilePosition',
    'SourceDefinition',

    # Tilesets
    'StandardTile',
    'AnimatedTile',
    'TileDefinition',
    'TilesetDefinition',

    # Tilemaps
    'TilesetLink',
    'TileIdentifier',
    'LayerDefinition',
    'TilemapDefinition',
    'EMPTY_TILE',

    # Builders
    'AnimatedTileDefBuilder',
    'TilesetDefinitionBuilder',
    'TilemapDefinitionBuilder',

    # Errors
    'TilesetValidationError',
    'DuplicatedTileIds',
    'DuplicatedTilePositions',
    'InvalidName',
    'TileOutOfBounds',
    'BuilderConsumedError',
    'DefinitionFormatError',

    # Files
    'DefinitionLoader',
]
