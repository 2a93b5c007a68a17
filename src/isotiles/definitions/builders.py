"""
Builders for tileset, animated tile and tilemap definitions.

Builders are mutable accumulators. Every mutator returns the builder so calls
can be chained. `build()` produces an immutable definition and consumes the
builder; any further use raises `BuilderConsumedError`.
"""

import logging
from collections import Counter, defaultdict
from pathlib import Path
from typing import Iterable, Optional, Union

from .errors import (
    BuilderConsumedError,
    DuplicatedTileIds,
    DuplicatedTilePositions,
    InvalidName,
    TileOutOfBounds,
)
from .models import (
    AnimatedTile,
    ImageDimensions,
    LayerDefinition,
    SourceDefinition,
    StandardTile,
    TileDefinition,
    TilemapDefinition,
    TilePosition,
    TilesetDefinition,
    TilesetLink,
    TileSize,
)

logger = logging.getLogger(__name__)


class _Builder:
    """Single-use guard shared by all builders."""

    def __init__(self):
        self._consumed = False

    def _ensure_usable(self) -> None:
        if self._consumed:
            raise BuilderConsumedError(
                f"{self.__class__.__name__} was already consumed by build()"
            )

    def _consume(self) -> None:
        self._ensure_usable()
        self._consumed = True


# =============================================================================
# Animated Tiles
# =============================================================================

class AnimatedTileDefBuilder(_Builder):
    """Accumulates the frames of an animated tile."""

    def __init__(self, tile_id: int):
        super().__init__()
        self._id = tile_id
        self._interval = 0.5
        self._positions: list[TilePosition] = []

    def with_interval(self, interval: float) -> "AnimatedTileDefBuilder":
        self._ensure_usable()
        self._interval = interval
        return self

    def with_id(self, tile_id: int) -> "AnimatedTileDefBuilder":
        self._ensure_usable()
        self._id = tile_id
        return self

    def add_position(self, position: TilePosition) -> "AnimatedTileDefBuilder":
        self._ensure_usable()
        self._positions.append(position)
        return self

    def remove_position(self, position: TilePosition) -> "AnimatedTileDefBuilder":
        """Remove the first frame at `position`. No-op if absent."""
        self._ensure_usable()
        if position in self._positions:
            self._positions.remove(position)
        return self

    def clear_positions(self) -> "AnimatedTileDefBuilder":
        self._ensure_usable()
        self._positions.clear()
        return self

    def build(self) -> AnimatedTile:
        self._consume()
        return AnimatedTile(
            id=self._id,
            positions=tuple(self._positions),
            interval_per_sec=self._interval,
        )


# =============================================================================
# Tilesets
# =============================================================================

class TilesetDefinitionBuilder(_Builder):
    """Accumulates and validates a tileset definition.

    Tiles are kept in insertion order. Adding a tile whose id is already
    present replaces the existing entry in place.
    """

    def __init__(self, source: SourceDefinition):
        super().__init__()
        self._source = source
        self._name: Optional[str] = None
        self._tile_size: Optional[TileSize] = None
        self._tiles: list[TileDefinition] = []

    def with_name(self, name: str) -> "TilesetDefinitionBuilder":
        self._ensure_usable()
        self._name = name
        return self

    def with_tile_size(self, width: float, height: float) -> "TilesetDefinitionBuilder":
        self._ensure_usable()
        self._tile_size = TileSize(width, height)
        return self

    def with_source(self, source: SourceDefinition) -> "TilesetDefinitionBuilder":
        self._ensure_usable()
        self._source = source
        return self

    def add_tile(self, tile: TileDefinition) -> "TilesetDefinitionBuilder":
        self._ensure_usable()
        for i, existing in enumerate(self._tiles):
            if existing.id == tile.id:
                self._tiles[i] = tile
                return self
        self._tiles.append(tile)
        return self

    def extend_tiles(self, tiles: Iterable[TileDefinition]) -> "TilesetDefinitionBuilder":
        """Append tiles as authored, without replacing existing ids.

        Used when importing stored definitions so that duplicated ids are
        reported by `build()` instead of being silently merged.
        """
        self._ensure_usable()
        self._tiles.extend(tiles)
        return self

    def remove_tile(self, tile_id: int) -> "TilesetDefinitionBuilder":
        """Remove the tile with `tile_id`. No-op if absent."""
        self._ensure_usable()
        for i, existing in enumerate(self._tiles):
            if existing.id == tile_id:
                del self._tiles[i]
                break
        return self

    def build(self, check_bounds: bool = False) -> TilesetDefinition:
        """Validate the accumulated state and produce a tileset definition.

        Checks run in order: duplicated ids, duplicated standard tile
        positions, bounds (only when `check_bounds` is set), name resolution.

        Args:
            check_bounds: Reject tiles whose cell does not fit inside the
                source image dimensions

        Raises:
            DuplicatedTileIds: Two or more tiles share an id
            DuplicatedTilePositions: Two or more standard tiles share a cell
            TileOutOfBounds: A tile cell lies outside the source image
            InvalidName: No name was set and the source path has no file name
        """
        self._consume()

        duplicated_ids = self._get_duplicated_ids(self._tiles)
        if duplicated_ids:
            raise DuplicatedTileIds(duplicated_ids)

        duplicated_positions = self._get_duplicated_positions(self._tiles)
        if duplicated_positions:
            raise DuplicatedTilePositions(duplicated_positions)

        tile_size = self._tile_size or TileSize.default()

        if check_bounds:
            for tile in self._tiles:
                if not self._tile_is_in_bounds(tile, tile_size, self._source.dimensions):
                    raise TileOutOfBounds(tile.id)

        name = self._name if self._name is not None else self._name_from_path(self._source.path)

        logger.debug(f"Built tileset '{name}' with {len(self._tiles)} tile(s)")
        return TilesetDefinition(
            name=name,
            tile_size=tile_size,
            source=self._source,
            tiles=tuple(self._tiles),
        )

    @staticmethod
    def _get_duplicated_ids(tiles: list[TileDefinition]) -> list[tuple[int, int]]:
        counts = Counter(tile.id for tile in tiles)
        return [(tile_id, count) for tile_id, count in counts.items() if count >= 2]

    @staticmethod
    def _get_duplicated_positions(
        tiles: list[TileDefinition],
    ) -> list[tuple[tuple[int, int], list[int]]]:
        # Animated tiles are not checked
        by_position: dict[tuple[int, int], list[int]] = defaultdict(list)
        for tile in tiles:
            if isinstance(tile, StandardTile):
                by_position[(tile.x, tile.y)].append(tile.id)
        return [(position, ids) for position, ids in by_position.items() if len(ids) >= 2]

    @staticmethod
    def _tile_is_in_bounds(
        tile: TileDefinition, tile_size: TileSize, dimensions: ImageDimensions
    ) -> bool:
        if isinstance(tile, StandardTile):
            cells = [(tile.x, tile.y)]
        else:
            cells = [(position.x, position.y) for position in tile.positions]
        return all(
            x * tile_size.width + tile_size.width <= dimensions.width
            and y * tile_size.height + tile_size.height <= dimensions.height
            for x, y in cells
        )

    @staticmethod
    def _name_from_path(path: Union[str, Path]) -> str:
        name = Path(path).name
        if name in ("", ".", ".."):
            raise InvalidName(path)
        try:
            name.encode("utf-8")
        except UnicodeEncodeError as e:
            # Undecodable bytes smuggled in as surrogates
            raise InvalidName(path) from e
        return name


# =============================================================================
# Tilemaps
# =============================================================================

class TilemapDefinitionBuilder(_Builder):
    """Accumulates a tilemap definition.

    Tileset links are keyed by path and layers by ordering id; adding an
    entry with an existing key replaces it in place. `build()` performs no
    cross-validation.
    """

    def __init__(self, name: str):
        super().__init__()
        self._name = name
        self._tile_size: Optional[TileSize] = None
        self._tilesets: list[TilesetLink] = []
        self._layers: list[LayerDefinition] = []

    def with_name(self, name: str) -> "TilemapDefinitionBuilder":
        self._ensure_usable()
        self._name = name
        return self

    def with_tile_size(self, width: float, height: float) -> "TilemapDefinitionBuilder":
        self._ensure_usable()
        self._tile_size = TileSize(width, height)
        return self

    def add_tileset(self, tileset_link: TilesetLink) -> "TilemapDefinitionBuilder":
        self._ensure_usable()
        for i, link in enumerate(self._tilesets):
            if link.path == tileset_link.path:
                self._tilesets[i] = tileset_link
                return self
        self._tilesets.append(tileset_link)
        return self

    def remove_tileset(self, path: Union[str, Path]) -> "TilemapDefinitionBuilder":
        """Remove the first link with `path`. No-op if absent."""
        self._ensure_usable()
        path = Path(path)
        for i, link in enumerate(self._tilesets):
            if link.path == path:
                del self._tilesets[i]
                break
        return self

    def add_layer(self, layer: LayerDefinition) -> "TilemapDefinitionBuilder":
        self._ensure_usable()
        for i, existing in enumerate(self._layers):
            if existing.ordering_id == layer.ordering_id:
                self._layers[i] = layer
                return self
        self._layers.append(layer)
        return self

    def remove_layer(self, ordering_id: int) -> "TilemapDefinitionBuilder":
        """Remove the layer with `ordering_id`. No-op if absent."""
        self._ensure_usable()
        for i, existing in enumerate(self._layers):
            if existing.ordering_id == ordering_id:
                del self._layers[i]
                break
        return self

    def build(self) -> TilemapDefinition:
        self._consume()
        return TilemapDefinition(
            name=self._name,
            tilesets=tuple(self._tilesets),
            tile_size=self._tile_size or TileSize.default(),
            layers=tuple(self._layers),
        )
