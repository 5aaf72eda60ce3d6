"""
tilevox - Cell Graph

The 3D lattice as an arena of integer cell ids. Each cell lists directed
edges to its in-bounds axis neighbors; lattice boundaries simply have
fewer edges (no wraparound). Diagonal horizontal neighbors are recorded
separately for orientation bookkeeping and never carry propagation.

Cell ids run x fastest, then y, then z:

    cell_id = (z * depth + y) * width + x
"""

from dataclasses import dataclass
from typing import Iterator

from .direction import AXIS_DIRECTIONS, DIAGONAL_DIRECTIONS, Direction


@dataclass(frozen=True)
class Edge:
    """A directed edge to the neighbor lying in direction."""

    direction: Direction
    cell_id: int


class CellGraph:
    """Lattice structure of width x depth x height cells. Immutable once built."""

    def __init__(self, width: int, depth: int, height: int):
        if width <= 0 or depth <= 0 or height <= 0:
            raise ValueError(
                f"Lattice dimensions must be positive, got {width}x{depth}x{height}"
            )
        self.width = width
        self.depth = depth
        self.height = height

        self.edges: list[tuple[Edge, ...]] = []
        self.diagonals: list[tuple[Edge, ...]] = []
        for x, y, z in self.positions():
            self.edges.append(self._neighbors(x, y, z, AXIS_DIRECTIONS))
            self.diagonals.append(self._neighbors(x, y, z, DIAGONAL_DIRECTIONS))

    def _neighbors(self, x: int, y: int, z: int, directions) -> tuple[Edge, ...]:
        edges = []
        for direction in directions:
            dx, dy, dz = direction.offset
            nx, ny, nz = x + dx, y + dy, z + dz
            if self.in_bounds(nx, ny, nz):
                edges.append(Edge(direction, self.cell_id(nx, ny, nz)))
        return tuple(edges)

    def __len__(self) -> int:
        return self.width * self.depth * self.height

    @property
    def shape(self) -> tuple[int, int, int]:
        return (self.width, self.depth, self.height)

    def in_bounds(self, x: int, y: int, z: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.depth and 0 <= z < self.height

    def positions(self) -> Iterator[tuple[int, int, int]]:
        """All (x, y, z) positions in cell id order."""
        for z in range(self.height):
            for y in range(self.depth):
                for x in range(self.width):
                    yield x, y, z

    def cell_id(self, x: int, y: int, z: int) -> int:
        if not self.in_bounds(x, y, z):
            raise IndexError(f"Position ({x}, {y}, {z}) outside lattice {self.shape}")
        return (z * self.depth + y) * self.width + x

    def position(self, cell_id: int) -> tuple[int, int, int]:
        if not 0 <= cell_id < len(self):
            raise IndexError(f"Cell id {cell_id} outside lattice of {len(self)} cells")
        x = cell_id % self.width
        y = (cell_id // self.width) % self.depth
        z = cell_id // (self.width * self.depth)
        return x, y, z

    @property
    def seed_position(self) -> tuple[int, int, int]:
        """Center of the lowest layer."""
        return (self.width // 2, self.depth // 2, 0)

    @property
    def seed_cell_id(self) -> int:
        return self.cell_id(*self.seed_position)

    def neighbor(self, cell_id: int, direction: Direction) -> int | None:
        """Neighbor id in direction (axis or diagonal), or None at the boundary."""
        edges = self.diagonals[cell_id] if direction.is_diagonal() else self.edges[cell_id]
        for edge in edges:
            if edge.direction is direction:
                return edge.cell_id
        return None
