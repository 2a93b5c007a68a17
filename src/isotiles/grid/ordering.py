"""Depth (z-order) computation for placed objects.

Depth combines a per-object base offset with the world y position so that
objects further down the screen are drawn in front. Static tiles are
ordered when placed and after every grid rotation; dynamic objects are
reordered every cycle.
"""

import logging
from typing import Iterable

from .models import PlacedObject, Vec3

logger = logging.getLogger(__name__)


def calculate_z_order(world_position: Vec3, z_offset: float) -> float:
    """Depth for an object at `world_position` with base `z_offset`."""
    return z_offset - world_position.y / 100


def _apply_z_order(obj: PlacedObject) -> None:
    obj.translation = obj.translation.with_z(calculate_z_order(obj.translation, obj.z_offset))


def order_static_tiles(new_tiles: Iterable[PlacedObject]) -> None:
    """Assign the initial depth of newly placed static tiles."""
    for obj in new_tiles:
        _apply_z_order(obj)


def reorder_on_rotation(static_tiles: Iterable[PlacedObject]) -> None:
    """Refresh the depth of all static tiles after the grid was rotated.

    Must run after every tracked object has been rotated.
    """
    for obj in static_tiles:
        old_z = obj.translation.z
        _apply_z_order(obj)
        logger.debug(f"Reordered {obj.name or 'tile'}: z {old_z} -> {obj.translation.z}")


def update_dynamic_object_z(dynamic_objects: Iterable[PlacedObject]) -> None:
    """Refresh the depth of dynamic objects. Runs every cycle."""
    for obj in dynamic_objects:
        _apply_z_order(obj)
