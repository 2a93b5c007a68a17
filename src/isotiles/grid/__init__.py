"""
Grid package for isotiles.

Provides the isometric projection math, grid rotation, depth ordering and
the world context that tracks placed objects.
"""

from .models import Vec3, GridPosition, GridOffset, ObjectKind, PlacedObject
from .projection import (
    grid_to_world, world_to_grid, rotate_vector, approx_eq_vec3, is_inside_tile
)
from .rotation import GridRotationEvent, rotate_position, rotate_grid
from .ordering import (
    calculate_z_order, order_static_tiles, reorder_on_rotation, update_dynamic_object_z
)
from .world import GridWorld
from .spawning import spawn_tilemap

__all__ = [
    # Models
    'Vec3',
    'GridPosition',
    'GridOffset',
    'ObjectKind',
    'PlacedObject',

    # Projection
    'grid_to_world',
    'world_to_grid',
    'rotate_vector',
    'approx_eq_vec3',
    'is_inside_tile',

    # Rotation and ordering
    'GridRotationEvent',
    'rotate_position',
    'rotate_grid',
    'calculate_z_order',
    'order_static_tiles',
    'reorder_on_rotation',
    'update_dynamic_object_z',

    # World
    'GridWorld',
    'spawn_tilemap',
]
