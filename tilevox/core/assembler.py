"""
tilevox - Voxel Assembler

Stamps each solved cell's tile pattern into one output grid. Cell (x, y, z)
lands at voxel offset (x * tile_width, y * tile_depth, z * tile_height),
so blocks tile the output with no gaps or overlaps.
"""

import logging
from typing import Sequence

from ..formats.voxel_grid import VoxelGrid
from .cell_graph import CellGraph
from .tileset import TileSet

log = logging.getLogger(__name__)


def assemble(graph: CellGraph, tile_ids: Sequence[int | None], tileset: TileSet) -> VoxelGrid:
    """
    Build the voxel grid for a solved lattice.

    Args:
        graph: Lattice the tile ids belong to
        tile_ids: Tile id per cell, in cell id order
        tileset: Catalog providing each tile's voxel pattern

    Returns:
        VoxelGrid of size lattice dimensions times tile size

    Raises:
        ValueError: If tile_ids does not cover the lattice or a cell is unobserved
        UnknownTileError: If a tile id is outside the catalog
    """
    if len(tile_ids) != len(graph):
        raise ValueError(f"Expected {len(graph)} tile ids, got {len(tile_ids)}")

    tile_width, tile_depth, tile_height = tileset.tile_size
    grid = VoxelGrid(
        graph.width * tile_width,
        graph.depth * tile_depth,
        graph.height * tile_height,
    )

    for cell_id, (x, y, z) in enumerate(graph.positions()):
        tile_id = tile_ids[cell_id]
        if tile_id is None:
            raise ValueError(f"Cell {cell_id} at ({x}, {y}, {z}) has no observation")
        grid.paste(
            tileset.voxels(tile_id),
            (x * tile_width, y * tile_depth, z * tile_height),
        )

    log.debug("Assembled %s from %d cells", grid, len(graph))
    return grid
