"""
tilevox - Tiles and Orientation

Immutable tile records. Rotated variants are new tiles, never views of
the base tile.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..formats.voxel_grid import VoxelGrid
from .direction import Direction, Rotation


class Tag(Enum):
    """Semantic tile role used by the compatibility rules."""

    DIRT = "dirt"
    GRASS = "grass"
    SKY = "sky"
    ROAD = "road"

    def __str__(self) -> str:
        return self.value


class OrientationKind(Enum):
    INVARIANT = "invariant"
    EDGE = "edge"
    CORNER = "corner"


@dataclass(frozen=True)
class Orientation:
    """
    How a tile faces.

    Invariant tiles look the same under every rotation and expand to a
    single catalog entry. Edge tiles face a cardinal direction and corner
    tiles a diagonal one; both expand to four rotated entries.
    """

    kind: OrientationKind
    direction: Optional[Direction] = None

    def __post_init__(self):
        if self.kind is OrientationKind.INVARIANT:
            if self.direction is not None:
                raise ValueError("Invariant orientation takes no direction")
        elif self.kind is OrientationKind.EDGE:
            if self.direction is None or not self.direction.is_horizontal():
                raise ValueError(f"Edge orientation needs a cardinal direction, got {self.direction}")
        elif self.direction is None or not self.direction.is_diagonal():
            raise ValueError(f"Corner orientation needs a diagonal direction, got {self.direction}")

    @classmethod
    def invariant(cls) -> "Orientation":
        return cls(OrientationKind.INVARIANT)

    @classmethod
    def edge(cls, direction: Direction) -> "Orientation":
        return cls(OrientationKind.EDGE, direction)

    @classmethod
    def corner(cls, direction: Direction) -> "Orientation":
        return cls(OrientationKind.CORNER, direction)

    @property
    def is_invariant(self) -> bool:
        return self.kind is OrientationKind.INVARIANT

    @property
    def is_edge(self) -> bool:
        return self.kind is OrientationKind.EDGE

    @property
    def is_corner(self) -> bool:
        return self.kind is OrientationKind.CORNER

    def rotated_z(self, rotation: Rotation) -> "Orientation":
        if self.direction is None:
            return self
        return Orientation(self.kind, self.direction.rotated_z(rotation))

    def __str__(self) -> str:
        if self.direction is None:
            return self.kind.value
        return str(self.direction)


@dataclass(frozen=True)
class Tile:
    """A catalog entry: display name, voxel pattern, tag and orientation."""

    name: str
    voxels: VoxelGrid = field(compare=False, repr=False)
    tag: Tag
    orientation: Orientation

    def rotated_z(self, rotation: Rotation) -> "Tile":
        """
        Build the rotated variant of this tile.

        The voxel pattern and the orientation direction are both rotated;
        the name gains the resulting orientation as a suffix, e.g.
        "road-edge" rotated by R90 becomes "road-edge-south".

        Args:
            rotation: Quarter turns to apply

        Returns:
            New Tile
        """
        orientation = self.orientation.rotated_z(rotation)
        return Tile(
            name=f"{self.name}-{orientation}",
            voxels=self.voxels.rotated_z(rotation),
            tag=self.tag,
            orientation=orientation,
        )

    def variants(self) -> list["Tile"]:
        """Expanded catalog entries: itself if invariant, else the four rotations."""
        if self.orientation.is_invariant:
            return [self]
        return [self.rotated_z(rotation) for rotation in Rotation]
