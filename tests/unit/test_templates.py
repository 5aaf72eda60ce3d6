"""
Unit tests for template parsing and loading.
"""

import json

import pytest

from tilevox.core.direction import Direction
from tilevox.core.templates import (
    Template,
    TemplateError,
    load_template,
    parse_orientation,
    parse_template,
)
from tilevox.core.tile import Orientation, Tag


def minimal_document(**overrides):
    document = {
        "name": "mini",
        "tile_size": [2, 2, 2],
        "seed_tile": "dirt",
        "tiles": [
            {"name": "dirt", "content": "dirt", "tag": "dirt"},
            {"name": "sky", "content": "sky", "tag": "sky", "orientation": "invariant"},
        ],
        "rules": [
            {"source": "dirt", "target": "sky", "directions": "up", "weight": 1.0},
        ],
    }
    document.update(overrides)
    return document


class TestParseOrientation:
    """Tests for parse_orientation."""

    def test_invariant(self):
        assert parse_orientation("invariant") == Orientation.invariant()

    def test_edge(self):
        assert parse_orientation({"edge": "west"}) == Orientation.edge(Direction.WEST)

    def test_corner(self):
        assert parse_orientation({"corner": "north-east"}) == Orientation.corner(
            Direction.NORTH_EAST
        )

    def test_edge_with_diagonal_rejected(self):
        with pytest.raises(TemplateError, match="Invalid orientation"):
            parse_orientation({"edge": "northeast"})

    def test_unknown_kind_rejected(self):
        with pytest.raises(TemplateError, match="Invalid orientation"):
            parse_orientation({"spiral": "east"})

    def test_unknown_string_rejected(self):
        with pytest.raises(TemplateError, match="Invalid orientation"):
            parse_orientation("sideways")


class TestParseTemplate:
    """Tests for parse_template."""

    def test_minimal(self):
        definition = parse_template(minimal_document())
        assert definition.name == "mini"
        assert definition.tile_size == (2, 2, 2)
        assert definition.seed_tile == "dirt"
        assert [t.name for t in definition.tiles] == ["dirt", "sky"]
        assert definition.tiles[0].orientation == Orientation.invariant()
        assert len(definition.rules) == 1

    def test_base_tiles_use_tile_size(self):
        tiles = parse_template(minimal_document()).base_tiles()
        assert tiles[0].voxels.shape == (2, 2, 2)
        assert tiles[0].tag is Tag.DIRT

    def test_missing_key(self):
        document = minimal_document()
        del document["rules"]
        with pytest.raises(TemplateError, match="missing key"):
            parse_template(document)

    def test_bad_tile_size(self):
        with pytest.raises(TemplateError, match="tile_size"):
            parse_template(minimal_document(tile_size=[3, 0, 3]))

    def test_no_tiles(self):
        with pytest.raises(TemplateError, match="no tiles"):
            parse_template(minimal_document(tiles=[]))

    def test_unknown_content(self):
        tiles = [{"name": "lava", "content": "lava", "tag": "dirt"}]
        with pytest.raises(TemplateError, match="unknown content"):
            parse_template(minimal_document(tiles=tiles))

    def test_unknown_tag(self):
        tiles = [{"name": "dirt", "content": "dirt", "tag": "lava"}]
        with pytest.raises(TemplateError):
            parse_template(minimal_document(tiles=tiles))

    def test_duplicate_tile_names(self):
        tiles = [
            {"name": "dirt", "content": "dirt", "tag": "dirt"},
            {"name": "dirt", "content": "grass", "tag": "grass"},
        ]
        with pytest.raises(TemplateError, match="Duplicate"):
            parse_template(minimal_document(tiles=tiles))

    def test_bad_rule(self):
        rules = [{"source": "dirt", "target": "sky", "directions": "up", "weight": -3}]
        with pytest.raises(TemplateError, match="Invalid rule"):
            parse_template(minimal_document(rules=rules))


class TestLoadTemplate:
    """Tests for loading template files."""

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "mini.json"
        path.write_text(json.dumps(minimal_document()))
        definition = load_template(path)
        assert definition.name == "mini"
        assert definition.source_path == path

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_template(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(TemplateError, match="not valid JSON"):
            load_template(path)


class TestRoadPreset:
    """Tests for the shipped road template."""

    def test_preset_file_exists(self):
        assert Template.ROAD.path.exists()

    def test_road_declares_six_base_tiles(self):
        definition = Template.ROAD.load()
        assert definition.name == "road"
        assert definition.seed_tile == "dirt"
        assert definition.tile_size == (3, 3, 3)
        assert [t.name for t in definition.tiles] == [
            "dirt",
            "grass",
            "road-inner",
            "road-edge",
            "road-corner",
            "sky",
        ]

    def test_road_rules_cover_dirt_only(self):
        definition = Template.ROAD.load()
        assert {rule.source for rule in definition.rules} == {Tag.DIRT}
        assert len(definition.rules) == 3
