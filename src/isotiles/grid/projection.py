"""Coordinate transformations between grid and world space.

Implements the 2:1 isometric diamond projection used for tile placement,
its inverse, point-in-tile hit testing and small vector helpers. All
functions are pure.
"""

import math
from typing import Union

from .models import GridPosition, Vec3

# Tolerance used by approx_eq_vec3 (single-precision machine epsilon)
F32_EPSILON = 1.1920929e-07
MAX_ULPS = 4


def _as_vec3(value: Union[Vec3, GridPosition]) -> Vec3:
    return value.to_vec3() if isinstance(value, GridPosition) else value


def grid_to_world(grid_pos: Union[Vec3, GridPosition], tile_width: float, tile_height: float) -> Vec3:
    """Project a grid coordinate into world space.

    Layers above 1 are lifted by a full tile height each; layers 0 and 1
    share the same height. The z component passes the layer through
    unchanged and is later replaced by the render depth.

    Args:
        grid_pos: Grid coordinate, fractional values allowed
        tile_width: Width of a tile in world units
        tile_height: Height of a tile in world units

    Returns:
        World position (x, y, layer)
    """
    grid_pos = _as_vec3(grid_pos)
    tile_width_half = tile_width / 2
    tile_height_half = tile_height / 2

    world_x = (grid_pos.x - grid_pos.y) * tile_width_half
    world_y = (grid_pos.x + grid_pos.y) * tile_height_half

    return Vec3(
        world_x,
        world_y + tile_height * max(0.0, grid_pos.z - 1),
        grid_pos.z,
    )


def world_to_grid(world_pos: Vec3, tile_width: float, tile_height: float) -> Vec3:
    """Inverse of the x/y terms of `grid_to_world`.

    The layer height bias is not removed, so round trips are exact only
    for layers 0 and 1.
    """
    tile_width_half = tile_width / 2
    tile_height_half = tile_height / 2

    grid_x = (world_pos.x / tile_width_half + world_pos.y / tile_height_half) / 2
    grid_y = (world_pos.y / tile_height_half - world_pos.x / tile_width_half) / 2

    return Vec3(grid_x, grid_y, world_pos.z)


def rotate_vector(v: Vec3, degrees: float) -> Vec3:
    """Rotate the x/y components of `v` by `degrees`.

    Both sine terms are added, unlike a textbook rotation matrix which
    subtracts one of them. Existing placements depend on this form.
    """
    # TODO: decide whether callers need the canonical matrix (x*cos - y*sin) before changing this
    radians = math.radians(degrees)
    cos = math.cos(radians)
    sin = math.sin(radians)
    return Vec3(
        v.x * cos + v.y * sin,
        v.x * sin + v.y * cos,
        v.z,
    )


def _ulps_eq(a: float, b: float, epsilon: float = F32_EPSILON, max_ulps: int = MAX_ULPS) -> bool:
    if abs(a - b) <= epsilon:
        return True
    if (a < 0) != (b < 0):
        return False
    return abs(a - b) <= max_ulps * math.ulp(max(abs(a), abs(b)))


def approx_eq_vec3(v1: Vec3, v2: Vec3) -> bool:
    """Component-wise float comparison for vectors.

    Components match when they differ by at most single-precision epsilon
    or by at most a few units in the last place.
    """
    return _ulps_eq(v1.x, v2.x) and _ulps_eq(v1.y, v2.y) and _ulps_eq(v1.z, v2.z)


def is_inside_tile(
    world_pos: Vec3,
    target_grid_pos: Union[Vec3, GridPosition],
    tile_width: float,
    tile_height: float,
) -> bool:
    """Check whether a world point falls inside the target cell.

    The point is converted to grid space and floored. The floored cell must
    equal the target (including its layer) and lie at non-negative x/y.
    """
    target = _as_vec3(target_grid_pos)
    floored = world_to_grid(world_pos, tile_width, tile_height).floor()

    return floored.x >= 0 and floored.y >= 0 and floored == target
