"""
Unit tests for tiles, orientation and rotation expansion.
"""

import pytest

from tilevox.core.constants import GREY
from tilevox.core.direction import Direction, Rotation
from tilevox.core.tile import Orientation, OrientationKind, Tag


class TestOrientation:
    """Tests for Orientation validation and rotation."""

    def test_invariant(self):
        orientation = Orientation.invariant()
        assert orientation.is_invariant
        assert orientation.direction is None
        assert str(orientation) == "invariant"

    def test_edge_needs_cardinal(self):
        assert Orientation.edge(Direction.WEST).is_edge
        with pytest.raises(ValueError, match="cardinal"):
            Orientation.edge(Direction.NORTH_EAST)
        with pytest.raises(ValueError, match="cardinal"):
            Orientation.edge(Direction.UP)

    def test_corner_needs_diagonal(self):
        assert Orientation.corner(Direction.NORTH_EAST).is_corner
        with pytest.raises(ValueError, match="diagonal"):
            Orientation.corner(Direction.EAST)

    def test_invariant_rejects_direction(self):
        with pytest.raises(ValueError, match="no direction"):
            Orientation(OrientationKind.INVARIANT, Direction.EAST)

    def test_rotation(self):
        assert Orientation.edge(Direction.WEST).rotated_z(Rotation.R90) == Orientation.edge(
            Direction.SOUTH
        )
        assert Orientation.invariant().rotated_z(Rotation.R90) == Orientation.invariant()

    def test_str_is_direction(self):
        assert str(Orientation.corner(Direction.SOUTH_WEST)) == "southwest"


class TestTileVariants:
    """Tests for Tile.rotated_z and Tile.variants."""

    def test_invariant_tile_has_one_variant(self, tile_factory):
        dirt = tile_factory("dirt", Tag.DIRT)
        assert dirt.variants() == [dirt]

    def test_edge_tile_has_four_named_variants(self, tile_factory):
        edge = tile_factory("road-edge", Tag.ROAD, "road_edge", Orientation.edge(Direction.WEST))
        names = [tile.name for tile in edge.variants()]
        assert names == [
            "road-edge-west",
            "road-edge-south",
            "road-edge-east",
            "road-edge-north",
        ]

    def test_corner_tile_variants(self, tile_factory):
        corner = tile_factory(
            "road-corner", Tag.ROAD, "road_corner", Orientation.corner(Direction.NORTH_EAST)
        )
        directions = [tile.orientation.direction for tile in corner.variants()]
        assert directions == [
            Direction.NORTH_EAST,
            Direction.NORTH_WEST,
            Direction.SOUTH_WEST,
            Direction.SOUTH_EAST,
        ]

    def test_variants_keep_tag(self, tile_factory):
        edge = tile_factory("road-edge", Tag.ROAD, "road_edge", Orientation.edge(Direction.WEST))
        assert {tile.tag for tile in edge.variants()} == {Tag.ROAD}

    def test_rotation_rotates_voxels(self, tile_factory):
        edge = tile_factory("road-edge", Tag.ROAD, "road_edge", Orientation.edge(Direction.WEST))
        # Pavement covers x >= 1; after R180 it covers x <= 1
        rotated = edge.rotated_z(Rotation.R180)
        assert rotated.voxels.get(0, 1, 0) == GREY
        assert rotated.voxels.occupied()[2, :, 0].sum() == 0

    def test_rotation_does_not_mutate_base(self, tile_factory):
        edge = tile_factory("road-edge", Tag.ROAD, "road_edge", Orientation.edge(Direction.WEST))
        before = edge.voxels.copy()
        edge.rotated_z(Rotation.R90)
        assert edge.voxels == before
        assert edge.orientation.direction is Direction.WEST

    def test_equality_ignores_voxels(self, tile_factory):
        a = tile_factory("dirt", Tag.DIRT)
        b = tile_factory("dirt", Tag.DIRT, "sky")
        assert a == b
