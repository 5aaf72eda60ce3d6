"""Shared pytest fixtures for tile set, lattice and solver tests."""

import pytest

from tilevox.core.cell_graph import CellGraph
from tilevox.core.models import content_for
from tilevox.core.rules import CompatibilityRule, RuleTable, parse_directions
from tilevox.core.templates import Template
from tilevox.core.tile import Orientation, Tag, Tile
from tilevox.core.tileset import TileSet


def make_tile(name, tag, content=None, orientation=None, size=(3, 3, 3)):
    """Build a tile from a content provider name (defaults to the tag value)."""
    return Tile(
        name=name,
        voxels=content_for(content or tag.value, *size),
        tag=tag,
        orientation=orientation or Orientation.invariant(),
    )


def make_rule(source, target, directions, weight, orientation="any"):
    return CompatibilityRule(source, target, parse_directions(directions), weight, orientation)


@pytest.fixture
def tile_factory():
    """Build tiles without a template: tile_factory("ground", Tag.DIRT, "dirt")."""
    return make_tile


@pytest.fixture
def rule_factory():
    """Build rules from a direction class name: rule_factory(Tag.DIRT, Tag.SKY, "up", 1.0)."""
    return make_rule


@pytest.fixture
def ground_sky_rules():
    """Ground supports sky above and more ground beside it; nothing else is allowed."""
    return RuleTable(
        [
            make_rule(Tag.DIRT, Tag.DIRT, "horizontal", 0.8),
            make_rule(Tag.DIRT, Tag.SKY, "up", 1.0),
        ]
    )


@pytest.fixture
def ground_sky_tileset(ground_sky_rules):
    """Two-tile catalog: ground (id 0, seed) and sky (id 1)."""
    tiles = [make_tile("ground", Tag.DIRT, "dirt"), make_tile("sky", Tag.SKY)]
    return TileSet(tiles, ground_sky_rules, seed_id=0, name="ground-sky")


@pytest.fixture
def silent_tileset():
    """Ground and sky with no rules at all, so every pairing is banned."""
    tiles = [make_tile("ground", Tag.DIRT, "dirt"), make_tile("sky", Tag.SKY)]
    return TileSet(tiles, RuleTable(), seed_id=0, name="silent")


@pytest.fixture
def uniform_tileset():
    """Ground that accepts ground on every side with equal weight."""
    tiles = [make_tile("ground", Tag.DIRT, "dirt")]
    rules = RuleTable([make_rule(Tag.DIRT, Tag.DIRT, "any", 1.0)])
    return TileSet(tiles, rules, seed_id=0, name="uniform")


@pytest.fixture
def road_tileset():
    """The shipped road preset."""
    return TileSet.generate(Template.ROAD)


@pytest.fixture
def column_graph():
    """1x1x2 lattice: a ground cell with one cell above it."""
    return CellGraph(1, 1, 2)


@pytest.fixture
def small_graph():
    return CellGraph(3, 3, 2)
