"""
tilevox - Tile Set and Compatibility Table

Expands a template's base tiles into the full rotated catalog and
precomputes, for every (tile id, lattice direction), the compatibility
weight of every tile as that neighbor. Tile ids are dense catalog
positions after expansion; weight vectors everywhere are indexed by them.
"""

import logging
from pathlib import Path
from typing import Iterable

import numpy as np

from ..formats.voxel_grid import VoxelGrid
from .constants import BAN
from .direction import AXIS_DIRECTIONS, Direction
from .rules import RuleTable
from .templates import Template, TemplateDefinition, TemplateError, load_template
from .tile import Tile

log = logging.getLogger(__name__)

_DIRECTION_INDEX = {direction: i for i, direction in enumerate(AXIS_DIRECTIONS)}


class UnknownTileError(IndexError):
    """Raised when a tile id or name is not in the catalog."""

    pass


def expand_tiles(base_tiles: Iterable[Tile]) -> list[Tile]:
    """
    Rotation-expand base tiles in declaration order.

    Invariant tiles are kept as-is; edge and corner tiles are replaced by
    their R0, R90, R180 and R270 variants.
    """
    tiles: list[Tile] = []
    for tile in base_tiles:
        tiles.extend(tile.variants())
    return tiles


def build_compatibility_table(tiles: list[Tile], rules: RuleTable) -> np.ndarray:
    """
    Evaluate the rule table for every (source, direction, target).

    Returns:
        float64 array of shape (6, len(tiles), len(tiles)) indexed as
        [direction index, source id, target id], with BAN for forbidden pairs
    """
    count = len(tiles)
    table = np.full((len(AXIS_DIRECTIONS), count, count), BAN, dtype=np.float64)
    for d, direction in enumerate(AXIS_DIRECTIONS):
        for source_id, source in enumerate(tiles):
            for target_id, target in enumerate(tiles):
                table[d, source_id, target_id] = rules.weight(source, direction, target)
    return table


class TileSet:
    """
    Expanded tile catalog plus its compatibility table.

    Read-only once built, so one TileSet can be shared by several solvers.
    """

    def __init__(
        self,
        tiles: list[Tile],
        rules: RuleTable,
        seed_id: int = 0,
        name: str = "custom",
    ):
        if not tiles:
            raise ValueError("TileSet needs at least one tile")
        if not 0 <= seed_id < len(tiles):
            raise UnknownTileError(f"Seed tile id {seed_id} outside catalog of {len(tiles)}")

        self.name = name
        self.tiles = list(tiles)
        self.rules = rules
        self.seed_id = seed_id
        self._ids = {tile.name: i for i, tile in enumerate(self.tiles)}
        if len(self._ids) != len(self.tiles):
            raise ValueError("Tile names must be unique after expansion")
        shapes = {tile.voxels.shape for tile in self.tiles}
        if len(shapes) != 1:
            raise ValueError(
                f"All tiles must share one voxel size, got {sorted(shapes)}; "
                "rotated tiles need a square footprint"
            )

        self.table = build_compatibility_table(self.tiles, rules)
        self.table.flags.writeable = False

        # Propagation adds support only; banned entries contribute nothing
        self.signals = np.clip(self.table, 0.0, None)
        self.signals.flags.writeable = False

        log.debug(
            "Built tile set '%s': %d tiles, %d rules, seed '%s'",
            name,
            len(self.tiles),
            len(rules),
            self.tiles[seed_id].name,
        )

    @classmethod
    def generate(cls, template: "Template | TemplateDefinition | str | Path") -> "TileSet":
        """
        Build the tile set for a template.

        Args:
            template: A preset, a parsed definition, or a path to a template file

        Returns:
            New TileSet

        Raises:
            TemplateError: If the seed tile is not in the expanded catalog
        """
        if isinstance(template, Template):
            definition = template.load()
        elif isinstance(template, TemplateDefinition):
            definition = template
        else:
            definition = load_template(template)

        tiles = expand_tiles(definition.base_tiles())
        names = [tile.name for tile in tiles]
        if definition.seed_tile not in names:
            raise TemplateError(
                f"Seed tile '{definition.seed_tile}' not in catalog of template "
                f"'{definition.name}' (tiles: {', '.join(names)})"
            )
        return cls(
            tiles,
            definition.rules,
            seed_id=names.index(definition.seed_tile),
            name=definition.name,
        )

    def __len__(self) -> int:
        return len(self.tiles)

    def __getitem__(self, tile_id: int) -> Tile:
        return self.tiles[self._check_id(tile_id)]

    def _check_id(self, tile_id: int) -> int:
        if not 0 <= tile_id < len(self.tiles):
            raise UnknownTileError(
                f"Tile id {tile_id} outside catalog of {len(self.tiles)} tiles"
            )
        return tile_id

    @property
    def names(self) -> list[str]:
        return [tile.name for tile in self.tiles]

    def tile_id(self, name: str) -> int:
        """Catalog id of the tile with the given expanded name."""
        try:
            return self._ids[name]
        except KeyError:
            raise UnknownTileError(f"No tile named '{name}' in '{self.name}'") from None

    def _direction_index(self, direction: Direction) -> int:
        try:
            return _DIRECTION_INDEX[direction]
        except KeyError:
            raise ValueError(f"{direction} is not a lattice direction") from None

    def update(self, tile_id: int, direction: Direction) -> np.ndarray:
        """
        Compatibility weights of every tile as the neighbor of tile_id in direction.

        Returns:
            Read-only vector of length len(self); BAN marks forbidden neighbors

        Raises:
            UnknownTileError: If tile_id is outside the catalog
            ValueError: If direction is diagonal
        """
        return self.table[self._direction_index(direction), self._check_id(tile_id)]

    def signal(self, tile_id: int, direction: Direction) -> np.ndarray:
        """update() with banned entries replaced by zero."""
        return self.signals[self._direction_index(direction), self._check_id(tile_id)]

    def weight(self, source_id: int, direction: Direction, target_id: int) -> float:
        return float(self.update(source_id, direction)[self._check_id(target_id)])

    def is_compatible(self, source_id: int, direction: Direction, target_id: int) -> bool:
        return self.weight(source_id, direction, target_id) != BAN

    def voxels(self, tile_id: int) -> VoxelGrid:
        return self[tile_id].voxels

    @property
    def tile_size(self) -> tuple[int, int, int]:
        return self.tiles[0].voxels.shape
