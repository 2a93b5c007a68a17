"""Grid world holding every placed object.

The world replaces the host engine's shared state with an explicit
context: grid extent, tile size, world scale, tracked objects and the
queue of pending rotation requests.
"""

import logging
from collections import deque
from dataclasses import replace
from typing import TYPE_CHECKING, Optional

from ..definitions.models import TileIdentifier, TileSize
from .models import GridOffset, GridPosition, ObjectKind, PlacedObject, Vec3
from .ordering import order_static_tiles, reorder_on_rotation, update_dynamic_object_z
from .projection import is_inside_tile
from .rotation import GridRotationEvent, placement_translation, rotate_grid

if TYPE_CHECKING:
    from ..settings import AppSettings


class GridWorld:
    """Tracks static tiles and dynamic objects on a square grid.

    Processing follows a fixed order once per cycle (see `process_cycle`):
    pending rotations are drained and each is fully applied, static tiles
    are reordered after each rotation, newly placed tiles get their first
    depth, and finally dynamic objects are reordered.
    """

    def __init__(self, size: int, tile_size: TileSize, scale: float = 1.0):
        """Initialize the world.

        Args:
            size: Number of cells per side of the grid
            tile_size: Size shared by every tile of the grid
            scale: Multiplier applied to the tile size in world space
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.size = size
        self.tile_size = tile_size
        self.scale = scale

        self.static_objects: list[PlacedObject] = []
        self.dynamic_objects: list[PlacedObject] = []
        self._unordered: list[PlacedObject] = []
        self._pending_rotations: deque[GridRotationEvent] = deque()

        self.logger.debug(f"GridWorld created: {size}x{size} cells, tile {tile_size}, scale {scale}")

    @classmethod
    def from_settings(
        cls,
        settings: "AppSettings",
        tile_size: Optional[TileSize] = None,
        size: Optional[int] = None,
    ) -> "GridWorld":
        """Create a world from configured grid settings.

        Explicit arguments take precedence over the configured values.
        """
        return cls(
            size=size if size is not None else settings.grid_size,
            tile_size=tile_size or TileSize(settings.tile_width, settings.tile_height),
            scale=settings.world_scale,
        )

    # === PLACEMENT ===

    def world_position(
        self, grid_position: GridPosition, offset: Optional[GridOffset] = None
    ) -> Vec3:
        """World translation for a cell with this world's tile size and scale."""
        return placement_translation(grid_position, self.tile_size, self.scale, offset)

    def add_static(
        self,
        grid_position: GridPosition,
        z_offset: Optional[float] = None,
        tile: Optional[TileIdentifier] = None,
        name: str = "",
    ) -> PlacedObject:
        """Place a static tile. Its depth is assigned on the next cycle.

        `z_offset` defaults to layer * 100.
        """
        obj = PlacedObject(
            grid_position=replace(grid_position),
            translation=self.world_position(grid_position),
            z_offset=z_offset if z_offset is not None else grid_position.layer * 100,
            kind=ObjectKind.STATIC,
            tile=tile,
            name=name,
        )
        self.static_objects.append(obj)
        self._unordered.append(obj)
        return obj

    def add_dynamic(
        self,
        grid_position: GridPosition,
        z_offset: Optional[float] = None,
        offset: Optional[GridOffset] = None,
        name: str = "",
    ) -> PlacedObject:
        """Place a movable object. Its depth is refreshed every cycle."""
        obj = PlacedObject(
            grid_position=replace(grid_position),
            translation=self.world_position(grid_position, offset),
            z_offset=z_offset if z_offset is not None else grid_position.layer * 100,
            kind=ObjectKind.DYNAMIC,
            offset=offset,
            name=name,
        )
        self.dynamic_objects.append(obj)
        return obj

    def move_dynamic(self, obj: PlacedObject, grid_position: GridPosition) -> None:
        """Move a dynamic object to another cell."""
        if obj.kind is not ObjectKind.DYNAMIC:
            raise ValueError(f"Only dynamic objects can be moved, got {obj.kind.value}")
        obj.grid_position = replace(grid_position)
        obj.translation = self.world_position(grid_position, obj.offset)

    def remove(self, obj: PlacedObject) -> None:
        """Stop tracking an object. No-op if it is not tracked."""
        for objects in (self.static_objects, self.dynamic_objects, self._unordered):
            if obj in objects:
                objects.remove(obj)

    # === ROTATION AND ORDERING ===

    def request_rotation(self, event: GridRotationEvent) -> None:
        """Queue a rotation; it is applied on the next `process_cycle()`."""
        self._pending_rotations.append(event)

    @property
    def pending_rotations(self) -> int:
        return len(self._pending_rotations)

    def process_cycle(self) -> int:
        """Run one processing cycle.

        Returns:
            Number of rotation events applied
        """
        applied = 0
        while self._pending_rotations:
            event = self._pending_rotations.popleft()
            rotate_grid(
                event,
                self.static_objects,
                self.dynamic_objects,
                self.size,
                self.tile_size,
                self.scale,
            )
            reorder_on_rotation(self.static_objects)
            applied += 1

        if self._unordered:
            order_static_tiles(self._unordered)
            self._unordered.clear()

        update_dynamic_object_z(self.dynamic_objects)

        if applied:
            self.logger.info(f"Applied {applied} grid rotation(s)")
        return applied

    # === QUERIES ===

    def hit_test(self, world_pos: Vec3) -> list[PlacedObject]:
        """Static objects whose cell contains `world_pos`, topmost first.

        The layer height bias is removed per object before testing, so a
        point hits the lifted tile of higher layers.
        """
        tile_width = self.tile_size.width * self.scale
        tile_height = self.tile_size.height * self.scale

        hits: list[PlacedObject] = []
        for obj in self.static_objects:
            layer = obj.grid_position.layer
            point = Vec3(world_pos.x, world_pos.y - tile_height * max(0, layer - 1), layer)
            if is_inside_tile(point, obj.grid_position, tile_width, tile_height):
                hits.append(obj)

        hits.sort(key=lambda obj: obj.depth, reverse=True)
        return hits
