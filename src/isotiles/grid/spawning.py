"""Populating a grid world from a tilemap definition."""

import logging

from ..definitions.models import EMPTY_TILE, TilemapDefinition
from .models import GridPosition, PlacedObject
from .world import GridWorld

logger = logging.getLogger(__name__)

# Depth base per layer: each layer is drawn above every tile of lower layers
LAYER_Z_STEP = 100


def spawn_tilemap(world: GridWorld, tilemap: TilemapDefinition) -> list[PlacedObject]:
    """Place every non-empty cell of every layer as a static tile.

    Layers are processed in ascending ordering id. Cell tiles[row][column]
    becomes GridPosition(column, row, ordering_id). Depth is assigned on
    the world's next processing cycle.

    Returns:
        Placed objects in placement order
    """
    placed: list[PlacedObject] = []
    for layer in tilemap.sorted_layers():
        layer_count = 0
        for y, row in enumerate(layer.tiles):
            for x, identifier in enumerate(row):
                if identifier is EMPTY_TILE:
                    continue
                position = GridPosition(x, y, layer.ordering_id)
                placed.append(
                    world.add_static(
                        position,
                        z_offset=layer.ordering_id * LAYER_Z_STEP,
                        tile=identifier,
                        name=f"Tile ({x},{y},{layer.ordering_id})",
                    )
                )
                layer_count += 1
        logger.debug(f"Spawned layer {layer.ordering_id} of '{tilemap.name}': {layer_count} tile(s)")

    logger.info(f"Spawned tilemap '{tilemap.name}': {len(placed)} tile(s)")
    return placed
