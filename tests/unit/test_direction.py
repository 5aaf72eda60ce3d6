"""
Unit tests for directions and rotations.
"""

import pytest

from tilevox.core.direction import (
    AXIS_DIRECTIONS,
    DIAGONAL_DIRECTIONS,
    HORIZONTAL_DIRECTIONS,
    Direction,
    Rotation,
)


class TestRotation:
    """Tests for Rotation composition."""

    def test_then_adds_quarter_turns(self):
        assert Rotation.R90.then(Rotation.R90) is Rotation.R180
        assert Rotation.R270.then(Rotation.R180) is Rotation.R90

    def test_then_wraps_to_identity(self):
        assert Rotation.R90.then(Rotation.R270) is Rotation.R0

    def test_inverse(self):
        assert Rotation.R0.inverse() is Rotation.R0
        assert Rotation.R90.inverse() is Rotation.R270
        assert Rotation.R180.inverse() is Rotation.R180

    def test_quarter_turns(self):
        assert [r.quarter_turns for r in Rotation] == [0, 1, 2, 3]


class TestDirectionRotation:
    """Tests for Direction.rotated_z."""

    def test_r90_is_counter_clockwise(self):
        assert Direction.EAST.rotated_z(Rotation.R90) is Direction.NORTH
        assert Direction.NORTH.rotated_z(Rotation.R90) is Direction.WEST
        assert Direction.WEST.rotated_z(Rotation.R90) is Direction.SOUTH
        assert Direction.SOUTH.rotated_z(Rotation.R90) is Direction.EAST

    def test_r180_reverses_horizontal(self):
        for direction in HORIZONTAL_DIRECTIONS:
            assert direction.rotated_z(Rotation.R180) is direction.opposite()

    def test_diagonals_rotate(self):
        assert Direction.NORTH_EAST.rotated_z(Rotation.R90) is Direction.NORTH_WEST
        assert Direction.SOUTH_EAST.rotated_z(Rotation.R90) is Direction.NORTH_EAST
        assert Direction.SOUTH_WEST.rotated_z(Rotation.R90) is Direction.SOUTH_EAST
        assert Direction.SOUTH_WEST.rotated_z(Rotation.R180) is Direction.NORTH_EAST
        assert Direction.SOUTH_WEST.rotated_z(Rotation.R270) is Direction.NORTH_WEST

    def test_vertical_unchanged(self):
        for rotation in Rotation:
            assert Direction.UP.rotated_z(rotation) is Direction.UP
            assert Direction.DOWN.rotated_z(rotation) is Direction.DOWN

    def test_four_quarter_turns_is_identity(self):
        for direction in Direction:
            rotated = direction
            for _ in range(4):
                rotated = rotated.rotated_z(Rotation.R90)
            assert rotated is direction

    def test_rotation_matches_offset_rotation(self):
        """Rotating a direction rotates its offset vector (x, y) -> (-y, x)."""
        for direction in list(HORIZONTAL_DIRECTIONS) + list(DIAGONAL_DIRECTIONS):
            dx, dy, dz = direction.offset
            assert direction.rotated_z(Rotation.R90).offset == (-dy, dx, dz)

    def test_composed_rotations(self):
        for direction in Direction:
            for a in Rotation:
                for b in Rotation:
                    assert direction.rotated_z(a).rotated_z(b) is direction.rotated_z(a.then(b))


class TestDirectionPredicates:
    """Tests for classification helpers."""

    def test_axis_directions(self):
        assert len(AXIS_DIRECTIONS) == 6
        assert not any(d.is_diagonal() for d in AXIS_DIRECTIONS)

    def test_horizontal(self):
        assert all(d.is_horizontal() for d in HORIZONTAL_DIRECTIONS)
        assert not Direction.UP.is_horizontal()
        assert not Direction.NORTH_EAST.is_horizontal()

    def test_vertical(self):
        assert Direction.UP.is_vertical()
        assert Direction.DOWN.is_vertical()
        assert not Direction.EAST.is_vertical()

    def test_perpendicular(self):
        assert Direction.EAST.is_perpendicular(Direction.NORTH)
        assert Direction.SOUTH.is_perpendicular(Direction.WEST)
        assert not Direction.EAST.is_perpendicular(Direction.WEST)
        assert not Direction.EAST.is_perpendicular(Direction.UP)

    def test_opposite_offsets_cancel(self):
        for direction in Direction:
            opposite = direction.opposite()
            assert opposite.opposite() is direction
            summed = tuple(a + b for a, b in zip(direction.offset, opposite.offset))
            assert summed == (0, 0, 0)


class TestDirectionParse:
    """Tests for Direction.parse."""

    def test_plain_name(self):
        assert Direction.parse("east") is Direction.EAST

    def test_hyphen_and_underscore(self):
        assert Direction.parse("north-east") is Direction.NORTH_EAST
        assert Direction.parse("SOUTH_WEST") is Direction.SOUTH_WEST

    def test_whitespace_and_case(self):
        assert Direction.parse("  Up ") is Direction.UP

    def test_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown direction"):
            Direction.parse("sideways")
