"""Quantized rotation of the whole grid.

A rotation event turns the square grid by 90 degrees around its own
extent. Every tracked object gets a new grid position and a recomputed
world translation; depth is refreshed afterwards by the ordering pass.
"""

import logging
from enum import Enum
from typing import Iterable, Optional

from ..definitions.models import TileSize
from .models import GridOffset, GridPosition, PlacedObject, Vec3
from .projection import grid_to_world

logger = logging.getLogger(__name__)


class GridRotationEvent(Enum):
    """Rotation request for the whole grid."""

    CLOCKWISE = "cw"
    COUNTER_CLOCKWISE = "ccw"


def rotate_position(
    event: GridRotationEvent, position: GridPosition, grid_size: int
) -> GridPosition:
    """Grid position of `position` after applying `event` on a grid of `grid_size`."""
    if event is GridRotationEvent.CLOCKWISE:
        return position.rotate_c(grid_size)
    return position.rotate_cc(grid_size)


def placement_translation(
    position: GridPosition,
    tile_size: TileSize,
    scale: float,
    offset: Optional[GridOffset] = None,
) -> Vec3:
    """World translation of an object at `position`, before depth ordering."""
    world_pos = grid_to_world(position, tile_size.width * scale, tile_size.height * scale)
    if offset is not None:
        world_pos = Vec3(world_pos.x + offset.x, world_pos.y + offset.y, world_pos.z)
    return world_pos


def rotate_object(
    obj: PlacedObject,
    event: GridRotationEvent,
    grid_size: int,
    tile_size: TileSize,
    scale: float,
) -> None:
    """Rotate one object in place: new grid position, new translation."""
    new_position = rotate_position(event, obj.grid_position, grid_size)
    obj.grid_position = new_position
    obj.translation = placement_translation(new_position, tile_size, scale, obj.offset)


def rotate_grid(
    event: GridRotationEvent,
    static_objects: Iterable[PlacedObject],
    dynamic_objects: Iterable[PlacedObject],
    grid_size: int,
    tile_size: TileSize,
    scale: float,
) -> None:
    """Apply one rotation event to every tracked object.

    Static tiles are rotated first, then dynamic objects. Depth is not
    touched; callers run `reorder_on_rotation` once all objects moved.
    """
    static_count = 0
    for obj in static_objects:
        rotate_object(obj, event, grid_size, tile_size, scale)
        static_count += 1

    dynamic_count = 0
    for obj in dynamic_objects:
        rotate_object(obj, event, grid_size, tile_size, scale)
        dynamic_count += 1

    logger.debug(
        f"Rotated grid {event.name.lower()}: {static_count} static, {dynamic_count} dynamic"
    )
