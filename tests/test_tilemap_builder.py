"""Tests for tilemap definitions and their builder."""

from pathlib import Path

import pytest

from isotiles.definitions import (
    BuilderConsumedError,
    ImageDimensions,
    LayerDefinition,
    SourceDefinition,
    StandardTile,
    TileIdentifier,
    TilemapDefinition,
    TilemapDefinitionBuilder,
    TilesetDefinitionBuilder,
    TilesetLink,
    TileSize,
)


class TestTilemapBuilder:
    """Test accumulation semantics of TilemapDefinitionBuilder."""

    def test_add_tileset(self) -> None:
        definition = (
            TilemapDefinitionBuilder("testmap.json")
            .add_tileset(TilesetLink(Path("./testset.json"), "t"))
            .build()
        )

        assert definition == TilemapDefinition(
            name="testmap.json",
            tilesets=(TilesetLink(Path("./testset.json"), "t"),),
            tile_size=TileSize(16, 16),
            layers=(),
        )

    def test_add_tileset_replaces_same_path(self) -> None:
        definition = (
            TilemapDefinitionBuilder("testmap.json")
            .add_tileset(TilesetLink(Path("a.json"), "a"))
            .add_tileset(TilesetLink(Path("b.json"), "b"))
            .add_tileset(TilesetLink(Path("a.json"), "x"))
            .build()
        )
        assert definition.tilesets == (
            TilesetLink(Path("a.json"), "x"),
            TilesetLink(Path("b.json"), "b"),
        )

    def test_remove_tileset(self) -> None:
        definition = (
            TilemapDefinitionBuilder("testmap.json")
            .add_tileset(TilesetLink(Path("./testset.json"), "t"))
            .remove_tileset(Path("./testset.json"))
            .build()
        )
        assert definition.tilesets == ()

    def test_remove_absent_tileset_is_noop(self) -> None:
        builder = TilemapDefinitionBuilder("testmap.json").add_tileset(
            TilesetLink(Path("a.json"), "a")
        )
        assert builder.remove_tileset("missing.json") is builder
        assert builder.build().tilesets == (TilesetLink(Path("a.json"), "a"),)

    def test_with_tile_size(self) -> None:
        definition = TilemapDefinitionBuilder("testmap.json").with_tile_size(32, 32).build()
        assert definition.tile_size == TileSize(32, 32)

    def test_with_name(self) -> None:
        assert TilemapDefinitionBuilder("a").with_name("b").build().name == "b"

    def test_layers_upsert_by_ordering_id(self) -> None:
        first = LayerDefinition.from_rows(0, [[TileIdentifier.new(1, "t")]])
        second = LayerDefinition.from_rows(1, [[None]])
        replacement = LayerDefinition.from_rows(0, [[TileIdentifier.new(2, "t")]])

        definition = (
            TilemapDefinitionBuilder("layers")
            .add_layer(first)
            .add_layer(second)
            .add_layer(replacement)
            .remove_layer(7)
            .build()
        )
        assert definition.layers == (replacement, second)

    def test_remove_layer(self) -> None:
        definition = (
            TilemapDefinitionBuilder("layers")
            .add_layer(LayerDefinition(0))
            .add_layer(LayerDefinition(1))
            .remove_layer(0)
            .build()
        )
        assert definition.layers == (LayerDefinition(1),)

    def test_duplicate_aliases_are_accepted(self) -> None:
        definition = (
            TilemapDefinitionBuilder("aliases")
            .add_tileset(TilesetLink(Path("a.json"), "t"))
            .add_tileset(TilesetLink(Path("b.json"), "t"))
            .add_layer(LayerDefinition.from_rows(0, [[TileIdentifier("dangling")]]))
            .build()
        )
        assert len(definition.tilesets) == 2

    def test_builder_is_consumed(self) -> None:
        builder = TilemapDefinitionBuilder("once")
        builder.build()
        with pytest.raises(BuilderConsumedError):
            builder.add_layer(LayerDefinition(0))


class TestTilemapDefinition:
    """Test tilemap definition helpers."""

    def test_sorted_layers(self) -> None:
        definition = (
            TilemapDefinitionBuilder("order")
            .add_layer(LayerDefinition(2))
            .add_layer(LayerDefinition(0))
            .add_layer(LayerDefinition(1))
            .build()
        )
        assert [layer.ordering_id for layer in definition.sorted_layers()] == [0, 1, 2]
        assert [layer.ordering_id for layer in definition.layers] == [2, 0, 1]

    def test_extent(self) -> None:
        definition = (
            TilemapDefinitionBuilder("extent")
            .add_layer(LayerDefinition.from_rows(0, [[None, None, None]]))
            .add_layer(LayerDefinition.from_rows(1, [[None], [None], [None], [None]]))
            .build()
        )
        assert definition.extent() == 4
        assert TilemapDefinitionBuilder("empty").build().extent() == 0

    def test_find_tile(self) -> None:
        source = SourceDefinition(Path("terrain.png"), ImageDimensions(32, 32))
        tileset = TilesetDefinitionBuilder(source).add_tile(StandardTile(3, 1, 0)).build()
        definition = TilemapDefinitionBuilder("find").build()

        assert definition.find_tile(TileIdentifier.new(3, "t"), {"t": tileset}) == StandardTile(3, 1, 0)
        assert definition.find_tile(TileIdentifier.new(4, "t"), {"t": tileset}) is None
        assert definition.find_tile(TileIdentifier.new(3, "x"), {"t": tileset}) is None


class TestTileIdentifier:
    """Test the composite tile key."""

    def test_new(self) -> None:
        assert TileIdentifier.new(12, "t").value == "12_t"

    def test_parse(self) -> None:
        assert TileIdentifier("12_t").parse() == (12, "t")

    @pytest.mark.parametrize("value", ["", "12", "_t", "12_", "x_t"])
    def test_parse_malformed(self, value: str) -> None:
        with pytest.raises(ValueError):
            TileIdentifier(value).parse()


class TestValueShapes:
    """Test the shape checks on tile sizes and tileset links."""

    @pytest.mark.parametrize("width, height", [(0, 16), (16, 0), (-8, 16), (16, -0.5)])
    def test_tile_size_must_be_positive(self, width: float, height: float) -> None:
        with pytest.raises(ValueError):
            TileSize(width, height)

    def test_builder_rejects_non_positive_tile_size(self) -> None:
        with pytest.raises(ValueError):
            TilemapDefinitionBuilder("sizes").with_tile_size(0, 16)

    def test_tile_size_from_dict_converts(self) -> None:
        size = TileSize.from_dict({"width": "32", "height": 16})
        assert size == TileSize(32.0, 16.0)
        assert isinstance(size.width, float)

    @pytest.mark.parametrize("alias", ["", "terrain", "tt"])
    def test_alias_must_be_one_character(self, alias: str) -> None:
        with pytest.raises(ValueError):
            TilesetLink(Path("a.json"), alias)

    def test_alias_from_dict(self) -> None:
        assert TilesetLink.from_dict({"path": "a.json", "alias": "t"}).alias == "t"
        with pytest.raises(ValueError):
            TilesetLink.from_dict({"path": "a.json", "alias": "terrain"})
