"""
Exceptions raised while building or loading definitions.
"""


class TilesetValidationError(ValueError):
    """Base class for errors raised by `TilesetDefinitionBuilder.build()`."""
    pass


class DuplicatedTileIds(TilesetValidationError):
    """Several tiles share the same id.

    `duplicates` lists (id, count) pairs in order of first occurrence.
    """

    def __init__(self, duplicates: list[tuple[int, int]]):
        self.duplicates = duplicates
        listed = ", ".join(f"{tile_id} (x{count})" for tile_id, count in duplicates)
        super().__init__(f"Duplicated tile ids: {listed}")


class DuplicatedTilePositions(TilesetValidationError):
    """Several standard tiles use the same source cell.

    `positions` lists ((x, y), [ids]) pairs in order of first occurrence.
    """

    def __init__(self, positions: list[tuple[tuple[int, int], list[int]]]):
        self.positions = positions
        listed = ", ".join(f"({x}, {y}): {ids}" for (x, y), ids in positions)
        super().__init__(f"Duplicated tile positions: {listed}")


class InvalidName(TilesetValidationError):
    """No name was given and none can be derived from the source path."""

    def __init__(self, path: object):
        self.path = path
        super().__init__(f"Cannot derive a tileset name from source path: {path!r}")


class TileOutOfBounds(TilesetValidationError):
    """A tile references a cell outside of the source image."""

    def __init__(self, tile_id: int):
        self.tile_id = tile_id
        super().__init__(f"Tile {tile_id} lies outside of the source image")


class BuilderConsumedError(RuntimeError):
    """A builder was used again after `build()`."""
    pass


class DefinitionFormatError(ValueError):
    """A definition file could not be parsed into a definition."""
    pass
