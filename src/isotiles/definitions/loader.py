"""
Reading and writing definition files.

Definitions are stored as JSON documents. Tilesets are rebuilt through
`TilesetDefinitionBuilder` on load, so a file on disk never bypasses
tileset validation.
"""

import logging
from pathlib import Path
from typing import Any, Union

import orjson

from .builders import TilemapDefinitionBuilder, TilesetDefinitionBuilder
from .errors import DefinitionFormatError, TilesetValidationError
from .models import (
    LayerDefinition,
    SourceDefinition,
    TilemapDefinition,
    TilesetDefinition,
    TilesetLink,
    TileSize,
    tile_definition_from_dict,
)


def tileset_from_dict(data: dict[str, Any]) -> TilesetDefinition:
    """Build a tileset definition from its dict form.

    Raises:
        TilesetValidationError: If the tiles violate the tileset rules
        KeyError, ValueError, TypeError: If the dict has the wrong shape
    """
    builder = TilesetDefinitionBuilder(SourceDefinition.from_dict(data["source"]))
    if data.get("name") is not None:
        builder.with_name(str(data["name"]))
    if data.get("tile_size") is not None:
        tile_size = TileSize.from_dict(data["tile_size"])
        builder.with_tile_size(tile_size.width, tile_size.height)
    builder.extend_tiles(tile_definition_from_dict(tile) for tile in data.get("tiles", []))
    return builder.build()


def tilemap_from_dict(data: dict[str, Any]) -> TilemapDefinition:
    """Build a tilemap definition from its dict form."""
    builder = TilemapDefinitionBuilder(str(data["name"]))
    if data.get("tile_size") is not None:
        tile_size = TileSize.from_dict(data["tile_size"])
        builder.with_tile_size(tile_size.width, tile_size.height)
    for link in data.get("tilesets", []):
        builder.add_tileset(TilesetLink.from_dict(link))
    for layer in data.get("layers", []):
        builder.add_layer(LayerDefinition.from_dict(layer))
    return builder.build()


class DefinitionLoader:
    """Loads and saves tileset and tilemap definition files."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def _read_json(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            raise FileNotFoundError(f"Definition file not found: {path}")

        try:
            data = orjson.loads(path.read_bytes())
        except orjson.JSONDecodeError as e:
            raise DefinitionFormatError(f"Failed to parse JSON from {path}: {e}") from e

        if not isinstance(data, dict):
            raise DefinitionFormatError(f"Expected a JSON object in {path}")
        return data

    def load_tileset(self, path: Union[str, Path]) -> TilesetDefinition:
        """Load and validate a tileset definition file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            DefinitionFormatError: If the file is not a tileset document
            TilesetValidationError: If the tileset fails validation
        """
        path = Path(path)
        self.logger.info(f"Loading tileset from: {path}")
        data = self._read_json(path)
        try:
            tileset = tileset_from_dict(data)
        except TilesetValidationError:
            raise
        except (KeyError, TypeError, ValueError) as e:
            raise DefinitionFormatError(f"Invalid tileset definition in {path}: {e}") from e
        self.logger.info(f"Loaded tileset '{tileset.name}' with {len(tileset.tiles)} tile(s)")
        return tileset

    def load_tilemap(self, path: Union[str, Path]) -> TilemapDefinition:
        """Load a tilemap definition file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            DefinitionFormatError: If the file is not a tilemap document
        """
        path = Path(path)
        self.logger.info(f"Loading tilemap from: {path}")
        data = self._read_json(path)
        try:
            tilemap = tilemap_from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise DefinitionFormatError(f"Invalid tilemap definition in {path}: {e}") from e
        self.logger.info(
            f"Loaded tilemap '{tilemap.name}' with {len(tilemap.layers)} layer(s)"
        )
        return tilemap

    def save(
        self, definition: Union[TilesetDefinition, TilemapDefinition], path: Union[str, Path]
    ) -> None:
        """Write a definition to `path` as indented JSON."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(orjson.dumps(definition.to_dict(), option=orjson.OPT_INDENT_2))
        self.logger.debug(f"Saved {definition.__class__.__name__} '{definition.name}' to {path}")

    def resolve_tilesets(
        self, tilemap: TilemapDefinition, base_dir: Union[str, Path]
    ) -> dict[str, TilesetDefinition]:
        """Load every tileset linked by `tilemap`, keyed by alias.

        Relative link paths are resolved against `base_dir`. When two links
        share an alias the later one wins.
        """
        base_dir = Path(base_dir)
        tilesets: dict[str, TilesetDefinition] = {}
        for link in tilemap.tilesets:
            tileset_path = link.path if link.path.is_absolute() else base_dir / link.path
            if link.alias in tilesets:
                self.logger.warning(
                    f"Tileset alias '{link.alias}' is linked more than once in '{tilemap.name}'"
                )
            tilesets[link.alias] = self.load_tileset(tileset_path)
        return tilesets
