"""
isotiles: isometric tile grids for 2D worlds

Converts between grid cells and world coordinates, rotates the grid in
90 degree steps, computes draw order, and provides the tileset/tilemap
definitions used to populate the grid.
"""

__version__ = "0.1.0"
__author__ = "isotiles Contributors"

# Core imports
from .grid import GridWorld, GridPosition, GridRotationEvent, Vec3, spawn_tilemap
from .definitions import (
    DefinitionLoader, TilesetDefinitionBuilder, TilemapDefinitionBuilder,
    AnimatedTileDefBuilder, TilesetDefinition, TilemapDefinition
)
from .utils.logging_config import setup_logging

__all__ = [
    # Grid
    'GridWorld',
    'GridPosition',
    'GridRotationEvent',
    'Vec3',
    'spawn_tilemap',

    # Definitions
    'DefinitionLoader',
    'TilesetDefinitionBuilder',
    'TilemapDefinitionBuilder',
    'AnimatedTileDefBuilder',
    'TilesetDefinition',
    'TilemapDefinition',

    # Logging
    'setup_logging',
]
