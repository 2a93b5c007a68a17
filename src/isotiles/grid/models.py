"""
Data models for grid and world space.

Grid positions are integer cells on a square lattice. World positions are
real-valued vectors whose z component is the render depth.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..definitions.models import TileIdentifier


@dataclass(frozen=True)
class Vec3:
    """Real-valued 3D vector used for world and fractional grid coordinates."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def floor(self) -> "Vec3":
        return Vec3(float(math.floor(self.x)), float(math.floor(self.y)), float(math.floor(self.z)))

    def with_z(self, z: float) -> "Vec3":
        return Vec3(self.x, self.y, z)


@dataclass
class GridPosition:
    """Cell on a square grid plus the layer it belongs to.

    `x` and `y` lie in [0, n) for a grid with `n` cells per side. The grid
    size is a property of the grid, not of the position, so it has to be
    passed to the rotation methods. A wrong `n` yields an out-of-range
    position; this is not checked.
    """
    x: int = 0
    y: int = 0
    layer: int = 0

    def rotate_c(self, n: int) -> "GridPosition":
        """Position after rotating the grid clockwise."""
        return GridPosition(self.y, n - self.x - 1, self.layer)

    def rotate_cc(self, n: int) -> "GridPosition":
        """Position after rotating the grid counter-clockwise."""
        return GridPosition(n - self.y - 1, self.x, self.layer)

    def to_vec3(self) -> Vec3:
        return Vec3(float(self.x), float(self.y), float(self.layer))

    @classmethod
    def from_vec3(cls, value: Vec3) -> "GridPosition":
        """Truncate a fractional grid vector to a cell."""
        return cls(int(value.x), int(value.y), int(value.z))


@dataclass(frozen=True)
class GridOffset:
    """World-space offset for objects not centred on their cell."""
    x: float = 0.0
    y: float = 0.0


class ObjectKind(Enum):
    """How an object takes part in depth ordering."""

    STATIC = "static"
    """Tiles; depth is recomputed on placement and on grid rotation only."""

    DYNAMIC = "dynamic"
    """Movable objects; depth is recomputed every cycle."""


@dataclass(eq=False)
class PlacedObject:
    """Object placed on the grid.

    `translation` is derived from `grid_position` and is never
    authoritative. Its z component holds the render depth once ordered.
    `z_offset` is the per-object depth base, conventionally layer * 100.
    """
    grid_position: GridPosition
    translation: Vec3
    z_offset: float
    kind: ObjectKind = ObjectKind.STATIC
    offset: Optional[GridOffset] = None
    tile: Optional["TileIdentifier"] = None
    name: str = ""

    @property
    def depth(self) -> float:
        return self.translation.z
