"""
tilevox - Map Generator

Runs the full pipeline for one template: build the tile set, solve a
lattice, assemble the voxel grid. A contradiction fails the attempt; with
attempts > 1 the generator starts over from scratch with the next seed.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from ..formats.voxel_grid import VoxelGrid
from .assembler import assemble
from .cell_graph import CellGraph
from .constants import MAP_DEPTH, MAP_HEIGHT, MAP_WIDTH, MAX_PROPAGATION_DISTANCE
from .solver import ContradictionError, SolverConfig, WFCSolver
from .templates import Template, TemplateDefinition
from .tileset import TileSet

log = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """A solved map and how it was produced."""

    tileset: TileSet
    graph: CellGraph
    tile_ids: list[int]
    grid: VoxelGrid
    seed: int | None
    attempts: int

    def tile_counts(self) -> dict[str, int]:
        """Number of cells per tile name, in catalog order (unused tiles omitted)."""
        counts = {name: 0 for name in self.tileset.names}
        for tile_id in self.tile_ids:
            counts[self.tileset[tile_id].name] += 1
        return {name: count for name, count in counts.items() if count}


def generate_map(
    template: "Template | TemplateDefinition | TileSet | str | Path",
    width: int = MAP_WIDTH,
    depth: int = MAP_DEPTH,
    height: int = MAP_HEIGHT,
    seed: int | None = None,
    max_distance: int = MAX_PROPAGATION_DISTANCE,
    attempts: int = 1,
) -> GenerationResult:
    """
    Generate a voxel map.

    Args:
        template: Preset, parsed definition, prebuilt TileSet or template file path
        width, depth, height: Lattice size in cells
        seed: Seed for the first attempt; attempt n uses seed + n. None
            draws fresh entropy for every attempt.
        max_distance: Propagation distance per observation
        attempts: Solves to try before giving up

    Returns:
        GenerationResult for the first attempt that solved

    Raises:
        ContradictionError: From the last attempt, if every attempt failed
        ValueError: If attempts < 1
    """
    if attempts < 1:
        raise ValueError(f"attempts must be at least 1, got {attempts}")

    tileset = template if isinstance(template, TileSet) else TileSet.generate(template)
    graph = CellGraph(width, depth, height)

    for attempt in range(attempts):
        attempt_seed = None if seed is None else seed + attempt
        solver = WFCSolver(
            graph,
            tileset,
            SolverConfig(max_distance=max_distance, seed=attempt_seed),
        )
        try:
            tile_ids = solver.run()
        except ContradictionError as e:
            if attempt + 1 == attempts:
                raise
            log.info("Attempt %d/%d failed: %s", attempt + 1, attempts, e)
            continue

        return GenerationResult(
            tileset=tileset,
            graph=graph,
            tile_ids=tile_ids,
            grid=assemble(graph, tile_ids, tileset),
            seed=attempt_seed,
            attempts=attempt + 1,
        )

    # Unreachable: the loop either returns or re-raises on the last attempt
    raise AssertionError("generate_map exhausted attempts without a result")
