"""
Data models for tileset and tilemap definitions.

Definitions are immutable values. They are produced by the builders in
`isotiles.definitions.builders` (which enforce the validation rules) or by
the loader when reading definition files from disk.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from PIL import Image


# =============================================================================
# Value Types
# =============================================================================

@dataclass(frozen=True)
class TileSize:
    """Size of a single tile in pixels. Both sides must be positive."""
    width: float
    height: float

    def __post_init__(self):
        if not (self.width > 0 and self.height > 0):
            raise ValueError(f"Tile size must be positive: {self.width}x{self.height}")

    @classmethod
    def default(cls) -> "TileSize":
        """Tile size used when a definition does not specify one."""
        return cls(16, 16)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TileSize":
        return cls(width=float(data["width"]), height=float(data["height"]))

    def to_dict(self) -> dict[str, Any]:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True)
class ImageDimensions:
    """Pixel dimensions of a tileset source image."""
    width: int
    height: int

    @classmethod
    def from_image(cls, path: Union[str, Path]) -> "ImageDimensions":
        """Read the dimensions of an image file.

        Only the header is parsed; pixel data is not decoded.
        """
        with Image.open(path) as image:
            width, height = image.size
        return cls(width=width, height=height)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ImageDimensions":
        return cls(width=int(data["width"]), height=int(data["height"]))

    def to_dict(self) -> dict[str, Any]:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True)
class TilePosition:
    """Cell (column, row) inside a tileset source image."""
    x: int
    y: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TilePosition":
        return cls(x=int(data["x"]), y=int(data["y"]))

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class SourceDefinition:
    """Source image of a tileset."""
    path: Path
    dimensions: ImageDimensions

    def __post_init__(self):
        object.__setattr__(self, "path", Path(self.path))

    @classmethod
    def from_image(cls, path: Union[str, Path]) -> "SourceDefinition":
        """Create a source definition by reading the image dimensions from disk."""
        return cls(path=Path(path), dimensions=ImageDimensions.from_image(path))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SourceDefinition":
        return cls(
            path=Path(data["path"]),
            dimensions=ImageDimensions.from_dict(data["dimensions"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path.as_posix(), "dimensions": self.dimensions.to_dict()}


# =============================================================================
# Tile Models
# =============================================================================

@dataclass(frozen=True)
class StandardTile:
    """Tile drawn from one fixed cell of the source image."""
    id: int
    x: int
    y: int

    def to_dict(self) -> dict[str, Any]:
        return {"type": "standard", "id": self.id, "x": self.x, "y": self.y}


@dataclass(frozen=True)
class AnimatedTile:
    """Tile cycling through several cells of the source image.

    `interval_per_sec` is the time each frame stays visible.
    """
    id: int
    positions: tuple[TilePosition, ...] = ()
    interval_per_sec: float = 0.5

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "animated",
            "id": self.id,
            "positions": [position.to_dict() for position in self.positions],
            "interval_per_sec": self.interval_per_sec,
        }


TileDefinition = Union[StandardTile, AnimatedTile]


def tile_definition_from_dict(data: dict[str, Any]) -> TileDefinition:
    """Create a tile definition from its tagged dict form.

    Raises:
        ValueError: If the variant tag is unknown
    """
    kind = data.get("type")
    if kind == "standard":
        return StandardTile(id=int(data["id"]), x=int(data["x"]), y=int(data["y"]))
    if kind == "animated":
        return AnimatedTile(
            id=int(data["id"]),
            positions=tuple(TilePosition.from_dict(p) for p in data.get("positions", [])),
            interval_per_sec=float(data.get("interval_per_sec", 0.5)),
        )
    raise ValueError(f"Unknown tile type: {kind!r}")


# =============================================================================
# Tileset Models
# =============================================================================

@dataclass(frozen=True)
class TilesetDefinition:
    """Validated catalog of tiles drawn from one source image.

    Instances are created by `TilesetDefinitionBuilder.build()`.
    """
    name: str
    tile_size: TileSize
    source: SourceDefinition
    tiles: tuple[TileDefinition, ...] = ()

    def get_tile(self, tile_id: int) -> Optional[TileDefinition]:
        """Return the tile with the given id, or None."""
        for tile in self.tiles:
            if tile.id == tile_id:
                return tile
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "tile_size": self.tile_size.to_dict(),
            "source": self.source.to_dict(),
            "tiles": [tile.to_dict() for tile in self.tiles],
        }


# =============================================================================
# Tilemap Models
# =============================================================================

@dataclass(frozen=True)
class TilesetLink:
    """Reference from a tilemap to a tileset file.

    The single-character alias is what `TileIdentifier`s use to point into
    the linked tileset.
    """
    path: Path
    alias: str

    def __post_init__(self):
        object.__setattr__(self, "path", Path(self.path))
        if not isinstance(self.alias, str) or len(self.alias) != 1:
            raise ValueError(f"Tileset alias must be a single character: {self.alias!r}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TilesetLink":
        return cls(path=Path(data["path"]), alias=str(data["alias"]))

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path.as_posix(), "alias": self.alias}


@dataclass(frozen=True)
class TileIdentifier:
    """Composite key "{numeric_id}_{alias}" pointing into a linked tileset.

    The value is not validated on construction. Malformed identifiers only
    fail when `parse()` is called.
    """
    value: str

    @classmethod
    def new(cls, tile_id: int, alias: str) -> "TileIdentifier":
        return cls(f"{tile_id}_{alias}")

    def parse(self) -> tuple[int, str]:
        """Split the identifier into (numeric_id, alias).

        Raises:
            ValueError: If the value is not of the form "{int}_{alias}"
        """
        numeric, sep, alias = self.value.rpartition("_")
        if not sep or not numeric or not alias:
            raise ValueError(f"Malformed tile identifier: {self.value!r}")
        try:
            return int(numeric), alias
        except ValueError as e:
            raise ValueError(f"Malformed tile identifier: {self.value!r}") from e


# Marks an empty cell in a layer
EMPTY_TILE = None


@dataclass(frozen=True)
class LayerDefinition:
    """One layer of a tilemap.

    `tiles` is indexed as tiles[row][column]; `None` marks an empty cell.
    """
    ordering_id: int
    tiles: tuple[tuple[Optional[TileIdentifier], ...], ...] = ()

    @classmethod
    def from_rows(
        cls, ordering_id: int, rows: list[list[Optional[TileIdentifier]]]
    ) -> "LayerDefinition":
        return cls(ordering_id=ordering_id, tiles=tuple(tuple(row) for row in rows))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LayerDefinition":
        rows: list[list[Optional[TileIdentifier]]] = [
            [TileIdentifier(str(cell)) if cell is not None else EMPTY_TILE for cell in row]
            for row in data.get("tiles", [])
        ]
        return cls.from_rows(int(data["ordering_id"]), rows)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ordering_id": self.ordering_id,
            "tiles": [
                [cell.value if cell is not None else None for cell in row]
                for row in self.tiles
            ],
        }


@dataclass(frozen=True)
class TilemapDefinition:
    """Named collection of layers referencing one or more tilesets.

    Instances are created by `TilemapDefinitionBuilder.build()`. No alias
    uniqueness or reference integrity is enforced.
    """
    name: str
    tilesets: tuple[TilesetLink, ...] = ()
    tile_size: TileSize = field(default_factory=TileSize.default)
    layers: tuple[LayerDefinition, ...] = ()

    def sorted_layers(self) -> list[LayerDefinition]:
        """Layers in ascending ordering_id (storage order is not sorted)."""
        return sorted(self.layers, key=lambda layer: layer.ordering_id)

    def extent(self) -> int:
        """Side of the smallest square grid holding every layer (0 if empty)."""
        size = 0
        for layer in self.layers:
            size = max(size, len(layer.tiles), *(len(row) for row in layer.tiles))
        return size

    def find_tile(
        self, identifier: TileIdentifier, tilesets: dict[str, TilesetDefinition]
    ) -> Optional[TileDefinition]:
        """Resolve a tile identifier against tilesets keyed by alias.

        Returns None for dangling references.
        """
        tile_id, alias = identifier.parse()
        tileset = tilesets.get(alias)
        if tileset is None:
            return None
        return tileset.get_tile(tile_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "tilesets": [link.to_dict() for link in self.tilesets],
            "tile_size": self.tile_size.to_dict(),
            "layers": [layer.to_dict() for layer in self.layers],
        }
