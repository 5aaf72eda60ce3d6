"""
tilevox - Voxel Grid

Dense 3D grid of RGBA voxels backed by a numpy array. A voxel with
alpha 0 is empty. Indexed as grid[x, y, z] with z pointing up.
"""

from typing import Iterator, Tuple

import numpy as np

Voxel = Tuple[int, int, int, int]

EMPTY: Voxel = (0, 0, 0, 0)


class VoxelGrid:
    """Fixed-size 3D grid of RGBA voxels."""

    def __init__(self, width: int, depth: int, height: int):
        if width <= 0 or depth <= 0 or height <= 0:
            raise ValueError(
                f"Grid dimensions must be positive, got {width}x{depth}x{height}"
            )
        self.data = np.zeros((width, depth, height, 4), dtype=np.uint8)

    @classmethod
    def from_array(cls, data: np.ndarray) -> "VoxelGrid":
        """Wrap an existing (width, depth, height, 4) uint8 array (copied)."""
        if data.ndim != 4 or data.shape[3] != 4:
            raise ValueError(f"Expected (w, d, h, 4) array, got shape {data.shape}")
        grid = cls.__new__(cls)
        grid.data = np.array(data, dtype=np.uint8, copy=True)
        return grid

    @property
    def width(self) -> int:
        return self.data.shape[0]

    @property
    def depth(self) -> int:
        return self.data.shape[1]

    @property
    def height(self) -> int:
        return self.data.shape[2]

    @property
    def shape(self) -> tuple[int, int, int]:
        return (self.width, self.depth, self.height)

    def get(self, x: int, y: int, z: int) -> Voxel:
        r, g, b, a = self.data[x, y, z]
        return (int(r), int(g), int(b), int(a))

    def set(self, x: int, y: int, z: int, voxel: Voxel):
        self.data[x, y, z] = voxel

    def fill(self, voxel: Voxel):
        self.data[...] = voxel

    def enumerate_cells(self) -> Iterator[tuple[int, int, int, Voxel]]:
        """Yield (x, y, z, voxel) with x varying fastest, then y, then z."""
        for z in range(self.height):
            for y in range(self.depth):
                for x in range(self.width):
                    yield x, y, z, self.get(x, y, z)

    def occupied(self) -> np.ndarray:
        """Boolean (width, depth, height) mask of non-empty voxels."""
        return self.data[..., 3] > 0

    def count(self) -> int:
        """Number of non-empty voxels."""
        return int(np.count_nonzero(self.occupied()))

    def colors(self) -> list[Voxel]:
        """Distinct non-empty colors in first-seen (x, y, z) scan order."""
        seen: dict[Voxel, None] = {}
        for x, y, z in zip(*np.nonzero(self.occupied())):
            seen.setdefault(self.get(x, y, z), None)
        return list(seen)

    def rotated_z(self, rotation) -> "VoxelGrid":
        """
        Return a copy rotated counter-clockwise around the vertical axis.

        Args:
            rotation: Rotation (or number of quarter turns)

        Returns:
            New VoxelGrid. Width and depth swap for odd quarter turns.
        """
        turns = int(rotation) % 4
        return VoxelGrid.from_array(np.rot90(self.data, k=turns, axes=(0, 1)))

    def paste(self, other: "VoxelGrid", offset: tuple[int, int, int]):
        """
        Copy another grid into this one at the given (x, y, z) offset.

        Raises:
            ValueError: If the pasted block does not fit
        """
        ox, oy, oz = offset
        w, d, h = other.shape
        if (
            ox < 0
            or oy < 0
            or oz < 0
            or ox + w > self.width
            or oy + d > self.depth
            or oz + h > self.height
        ):
            raise ValueError(
                f"Block {w}x{d}x{h} at {offset} does not fit in grid {self.shape}"
            )
        self.data[ox : ox + w, oy : oy + d, oz : oz + h] = other.data

    def copy(self) -> "VoxelGrid":
        return VoxelGrid.from_array(self.data)

    def __eq__(self, other) -> bool:
        if not isinstance(other, VoxelGrid):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self.data, other.data)

    def __repr__(self) -> str:
        return f"VoxelGrid({self.width}x{self.depth}x{self.height}, {self.count()} voxels)"
