"""
tilevox - Directions and Rotations

Axis-aligned directions used for lattice edges, diagonal directions used
only to describe how corner tiles face, and the four quarter-turn
rotations around the vertical axis.

Axes: East = +x, North = +y, Up = +z. Rotations turn counter-clockwise
when seen from above, so R90 maps East to North.
"""

from enum import Enum, IntEnum


class Rotation(IntEnum):
    """Counter-clockwise quarter turns around the vertical axis."""

    R0 = 0
    R90 = 1
    R180 = 2
    R270 = 3

    @property
    def quarter_turns(self) -> int:
        return int(self)

    def then(self, other: "Rotation") -> "Rotation":
        """Compose two rotations (apply self, then other)."""
        return Rotation((self + other) % 4)

    def inverse(self) -> "Rotation":
        return Rotation((4 - self) % 4)


class Direction(Enum):
    """Lattice and orientation directions."""

    EAST = "east"
    WEST = "west"
    NORTH = "north"
    SOUTH = "south"
    UP = "up"
    DOWN = "down"
    NORTH_EAST = "northeast"
    NORTH_WEST = "northwest"
    SOUTH_EAST = "southeast"
    SOUTH_WEST = "southwest"

    def __str__(self) -> str:
        return self.value

    def rotated_z(self, rotation: Rotation) -> "Direction":
        """
        Rotate this direction around the vertical axis.

        Vertical directions are unchanged by any rotation.

        Args:
            rotation: Quarter turns to apply

        Returns:
            The rotated direction
        """
        ring = _CARDINAL_RING if self in _CARDINAL_RING else _DIAGONAL_RING
        if self not in ring:
            return self
        index = ring.index(self)
        return ring[(index + Rotation(rotation).quarter_turns) % 4]

    def is_perpendicular(self, other: "Direction") -> bool:
        """True for East/West against North/South (horizontal cardinals only)."""
        east_west = (Direction.EAST, Direction.WEST)
        north_south = (Direction.NORTH, Direction.SOUTH)
        return (self in east_west and other in north_south) or (
            self in north_south and other in east_west
        )

    def is_horizontal(self) -> bool:
        return self in _CARDINAL_RING

    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)

    def is_diagonal(self) -> bool:
        return self in _DIAGONAL_RING

    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @property
    def offset(self) -> tuple[int, int, int]:
        """(dx, dy, dz) step for this direction."""
        return _OFFSETS[self]

    @classmethod
    def parse(cls, name: str) -> "Direction":
        """Look up a direction by name, accepting "north-east" or "NORTH_EAST"."""
        key = name.strip().lower().replace("_", "").replace("-", "")
        for direction in cls:
            if direction.value == key:
                return direction
        raise ValueError(f"Unknown direction: '{name}'")


# Counter-clockwise order, so index + 1 is a 90 degree turn
_CARDINAL_RING = (Direction.EAST, Direction.NORTH, Direction.WEST, Direction.SOUTH)
_DIAGONAL_RING = (
    Direction.NORTH_EAST,
    Direction.NORTH_WEST,
    Direction.SOUTH_WEST,
    Direction.SOUTH_EAST,
)

_OPPOSITES = {
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.NORTH_EAST: Direction.SOUTH_WEST,
    Direction.SOUTH_WEST: Direction.NORTH_EAST,
    Direction.NORTH_WEST: Direction.SOUTH_EAST,
    Direction.SOUTH_EAST: Direction.NORTH_WEST,
}

_OFFSETS = {
    Direction.EAST: (1, 0, 0),
    Direction.WEST: (-1, 0, 0),
    Direction.NORTH: (0, 1, 0),
    Direction.SOUTH: (0, -1, 0),
    Direction.UP: (0, 0, 1),
    Direction.DOWN: (0, 0, -1),
    Direction.NORTH_EAST: (1, 1, 0),
    Direction.NORTH_WEST: (-1, 1, 0),
    Direction.SOUTH_EAST: (1, -1, 0),
    Direction.SOUTH_WEST: (-1, -1, 0),
}

# Directions that carry propagation edges, in edge-list order
AXIS_DIRECTIONS = (
    Direction.EAST,
    Direction.WEST,
    Direction.NORTH,
    Direction.SOUTH,
    Direction.UP,
    Direction.DOWN,
)

HORIZONTAL_DIRECTIONS = AXIS_DIRECTIONS[:4]

DIAGONAL_DIRECTIONS = (
    Direction.NORTH_EAST,
    Direction.NORTH_WEST,
    Direction.SOUTH_EAST,
    Direction.SOUTH_WEST,
)
