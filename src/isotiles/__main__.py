"""
Main entry point for isotiles.
Usage: python -m isotiles <tilemap.json> [--rotate cw|ccw ...]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .definitions import DefinitionFormatError, DefinitionLoader, TilesetValidationError
from .grid import GridRotationEvent, GridWorld, spawn_tilemap
from .settings import AppSettings
from .utils.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="isotiles",
        description="Place a tilemap on an isometric grid and print world positions and depths.",
    )
    parser.add_argument("tilemap", type=Path, help="Tilemap definition file (JSON)")
    parser.add_argument(
        "--rotate",
        action="append",
        choices=[event.value for event in GridRotationEvent],
        default=[],
        help="Rotate the grid before printing; may be repeated",
    )
    parser.add_argument("--settings", type=Path, help="INI settings file to use")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    logger = logging.getLogger(f"{__name__}.main")

    settings = AppSettings(settings_file=args.settings)
    setup_logging(settings)
    logger.debug(f"Settings stored at: {settings.get_settings_file_path()}")

    validation = settings.validate()
    for warning in validation.warnings:
        logger.warning(f"  {warning}")
    if not validation.is_valid:
        logger.error("Configuration validation failed:")
        for error in validation.errors:
            logger.error(f"  {error}")
        return 1

    loader = DefinitionLoader()
    try:
        tilemap = loader.load_tilemap(args.tilemap)
        tilesets = loader.resolve_tilesets(tilemap, args.tilemap.parent)
    except (FileNotFoundError, DefinitionFormatError) as e:
        logger.error(str(e))
        return 1
    except TilesetValidationError as e:
        logger.error(f"Tileset validation failed: {e}")
        return 1

    for alias, tileset in tilesets.items():
        logger.info(f"Tileset '{alias}': {tileset.name} ({len(tileset.tiles)} tile(s))")

    world = GridWorld.from_settings(
        settings,
        tile_size=tilemap.tile_size,
        size=tilemap.extent() or settings.grid_size,
    )
    spawn_tilemap(world, tilemap)
    world.process_cycle()

    for value in args.rotate:
        world.request_rotation(GridRotationEvent(value))
    world.process_cycle()

    for obj in sorted(world.static_objects, key=lambda o: o.depth):
        pos = obj.grid_position
        world_pos = obj.translation
        tile = obj.tile.value if obj.tile else "-"
        print(
            f"{tile:>8}  grid=({pos.x},{pos.y},{pos.layer})  "
            f"world=({world_pos.x:.2f},{world_pos.y:.2f})  depth={world_pos.z:.2f}"
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())
