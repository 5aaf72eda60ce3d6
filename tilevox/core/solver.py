"""
tilevox - Wave Function Collapse Solver

Fills a CellGraph with tile ids from a TileSet. Each cell carries a
weight vector over tile ids; the solver repeatedly picks the unobserved
cell with the lowest entropy, samples a tile for it in proportion to its
weights, and pushes compatibility signal from the new tile out to nearby
cells.

States:

    UNSOLVED -> SOLVING -> SOLVED
                        -> CONTRADICTION

A contradiction (a cell with no usable weights at observation time) ends
the run. The solver never backtracks or reseeds; callers that want
another attempt build a new solver with a different seed.

Algorithm details:
- Observation samples from the cell's weights as a categorical
  distribution using the solver's own numpy Generator.
- Propagation walks outward from the observed cell depth-first, updating
  each reachable cell at most once per call and stopping max_distance
  edges out. Signal from the observed tile is added to each unobserved
  cell's weights, which are then renormalized. Banned neighbors add no
  signal. Cells that have not yet received any signal are "uninformed"
  and have infinite entropy.
- Selection picks the informed unobserved cell with the lowest entropy,
  ties going to the lowest cell id. If only uninformed cells remain, the
  lowest id among them is returned so that its observation reports the
  contradiction.
"""

import logging
from dataclasses import dataclass
from enum import Enum

import numpy as np

from .cell_graph import CellGraph
from .constants import MAX_PROPAGATION_DISTANCE, UNINFORMED_ENTROPY
from .tileset import TileSet

log = logging.getLogger(__name__)

UNOBSERVED = -1


class SolverState(Enum):
    UNSOLVED = "unsolved"
    SOLVING = "solving"
    SOLVED = "solved"
    CONTRADICTION = "contradiction"


class ContradictionError(Exception):
    """Raised when a cell's weights admit no tile at observation time."""

    def __init__(self, cell_id: int, position: tuple[int, int, int], weights_sum: float):
        self.cell_id = cell_id
        self.position = position
        self.weights_sum = weights_sum
        super().__init__(str(self))

    def __str__(self) -> str:
        x, y, z = self.position
        return (
            f"Contradiction at cell {self.cell_id} ({x}, {y}, {z}): "
            f"no tile is compatible with its neighbors (weight sum {self.weights_sum:g})"
        )


class StepLimitError(Exception):
    """Raised when the solve loop exceeds its step limit."""

    pass


@dataclass
class SolverConfig:
    """
    Solver tuning.

    Attributes:
        max_distance: Edges walked outward from each observation. Larger
            values spread constraints further per step at higher cost.
        seed: Seed for the solver's random generator (None = nondeterministic)
        max_steps: Maximum observations for run(); None means one per cell
    """

    max_distance: int = MAX_PROPAGATION_DISTANCE
    seed: int | None = None
    max_steps: int | None = None

    def __post_init__(self):
        if self.max_distance < 1:
            raise ValueError(f"max_distance must be at least 1, got {self.max_distance}")
        if self.max_steps is not None and self.max_steps < 0:
            raise ValueError(f"max_steps must be non-negative, got {self.max_steps}")


def shannon_entropy(probabilities: np.ndarray) -> float:
    """Shannon entropy (natural log) of a normalized weight vector."""
    p = probabilities[probabilities > 0]
    return float(-np.sum(p * np.log(p)))


class Wave:
    """
    Per-cell mutable state, indexed by cell id.

    Attributes:
        weights: (cells, tiles) float64 weight vectors
        entropies: (cells,) entropy per cell; UNINFORMED_ENTROPY until
            a cell first receives signal, 0 once observed
        observations: (cells,) chosen tile id, or UNOBSERVED
    """

    def __init__(self, cell_count: int, tile_count: int):
        self.weights = np.zeros((cell_count, tile_count), dtype=np.float64)
        self.entropies = np.full(cell_count, UNINFORMED_ENTROPY, dtype=np.float64)
        self.observations = np.full(cell_count, UNOBSERVED, dtype=np.int64)

    @classmethod
    def seeded(cls, graph: CellGraph, tileset: TileSet) -> "Wave":
        """All-zero wave with the seed cell pre-observed as the seed tile."""
        wave = cls(len(graph), len(tileset))
        wave.collapse(graph.seed_cell_id, tileset.seed_id)
        return wave

    def collapse(self, cell_id: int, tile_id: int):
        self.weights[cell_id] = 0.0
        self.weights[cell_id, tile_id] = 1.0
        self.entropies[cell_id] = 0.0
        self.observations[cell_id] = tile_id

    def is_observed(self, cell_id: int) -> bool:
        return self.observations[cell_id] != UNOBSERVED

    def observed_count(self) -> int:
        return int(np.count_nonzero(self.observations != UNOBSERVED))


class WFCSolver:
    """Wave function collapse over a CellGraph using a TileSet's compatibility table."""

    def __init__(
        self,
        graph: CellGraph,
        tileset: TileSet,
        config: SolverConfig | None = None,
        rng: np.random.Generator | None = None,
    ):
        """
        Args:
            graph: Lattice to fill (shared read-only)
            tileset: Catalog and compatibility table (shared read-only)
            config: Solver tuning (default: SolverConfig())
            rng: Random generator; built from config.seed when omitted
        """
        self.graph = graph
        self.tileset = tileset
        self.config = config if config is not None else SolverConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.wave = Wave.seeded(graph, tileset)
        self.state = SolverState.UNSOLVED
        self.steps = 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def observation(self, cell_id: int) -> int | None:
        tile_id = int(self.wave.observations[cell_id])
        return None if tile_id == UNOBSERVED else tile_id

    def observed_count(self) -> int:
        return self.wave.observed_count()

    def is_solved(self) -> bool:
        return self.observed_count() == len(self.graph)

    def tile_ids(self) -> list[int]:
        """
        Solved tile id for every cell, in cell id order.

        Raises:
            ValueError: If any cell is still unobserved
        """
        if not self.is_solved():
            missing = len(self.graph) - self.observed_count()
            raise ValueError(f"Lattice not solved: {missing} cell(s) unobserved")
        return [int(tile_id) for tile_id in self.wave.observations]

    def tile_grid(self) -> np.ndarray:
        """Solved tile ids as a (width, depth, height) array."""
        ids = np.array(self.tile_ids(), dtype=np.int64)
        # Cell ids run x fastest, so reshape as (z, y, x) and transpose
        return ids.reshape(self.graph.height, self.graph.depth, self.graph.width).transpose(2, 1, 0)

    # ------------------------------------------------------------------
    # Algorithm steps
    # ------------------------------------------------------------------

    def select_next_cell(self) -> int | None:
        """
        Choose the next cell to observe.

        Returns:
            Lowest-entropy informed unobserved cell (lowest id on ties), the
            lowest-id unobserved cell if none is informed, or None when every
            cell is observed
        """
        unobserved = self.wave.observations == UNOBSERVED
        if not unobserved.any():
            return None

        candidates = np.where(unobserved, self.wave.entropies, np.inf)
        cell_id = int(np.argmin(candidates))
        if not np.isfinite(candidates[cell_id]):
            cell_id = int(np.argmax(unobserved))
        return cell_id

    def observe(self, cell_id: int) -> int:
        """
        Collapse a cell to a tile sampled from its weights.

        Args:
            cell_id: Unobserved cell to collapse

        Returns:
            Chosen tile id

        Raises:
            ValueError: If the cell is already observed
            ContradictionError: If the weights are not a usable distribution
        """
        if self.wave.is_observed(cell_id):
            raise ValueError(f"Cell {cell_id} is already observed")

        weights = self.wave.weights[cell_id]
        total = float(weights.sum())
        if not (np.all(np.isfinite(weights)) and np.all(weights >= 0) and total > 0):
            self.state = SolverState.CONTRADICTION
            error = ContradictionError(cell_id, self.graph.position(cell_id), total)
            log.warning("%s", error)
            raise error

        tile_id = int(self.rng.choice(len(weights), p=weights / total))
        self.wave.collapse(cell_id, tile_id)

        log.debug(
            "Observed cell %d at %s as '%s'",
            cell_id,
            self.graph.position(cell_id),
            self.tileset[tile_id].name,
        )
        return tile_id

    def propagate(self, origin_id: int) -> int:
        """
        Push the observed tile's compatibility signal outward.

        Args:
            origin_id: An observed cell

        Returns:
            Number of unobserved cells whose weights were updated

        Raises:
            ValueError: If origin_id is not observed
        """
        origin_tile = self.observation(origin_id)
        if origin_tile is None:
            raise ValueError(f"Cannot propagate from unobserved cell {origin_id}")

        stack = [(origin_id, 0)]
        visited = {origin_id}
        updated = 0

        while stack:
            cell_id, distance = stack.pop()
            for edge in self.graph.edges[cell_id]:
                if edge.cell_id in visited:
                    continue
                visited.add(edge.cell_id)
                next_distance = distance + 1

                if not self.wave.is_observed(edge.cell_id):
                    self._add_signal(
                        edge.cell_id, self.tileset.signal(origin_tile, edge.direction)
                    )
                    updated += 1

                if next_distance < self.config.max_distance:
                    stack.append((edge.cell_id, next_distance))

        log.debug("Propagated from cell %d to %d cell(s)", origin_id, updated)
        return updated

    def _add_signal(self, cell_id: int, signal: np.ndarray):
        weights = self.wave.weights[cell_id]
        weights += signal
        total = weights.sum()
        if total > 0:
            weights /= total
            self.wave.entropies[cell_id] = shannon_entropy(weights)

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def step(self) -> bool:
        """
        Run one select / observe / propagate step.

        Returns:
            True if a cell was observed, False if the lattice is solved

        Raises:
            ContradictionError: If the selected cell cannot be observed
        """
        if self.state is SolverState.CONTRADICTION:
            raise RuntimeError("Solver already hit a contradiction; start a new solver")
        if self.state is SolverState.UNSOLVED:
            self._start()

        cell_id = self.select_next_cell()
        if cell_id is None:
            self.state = SolverState.SOLVED
            return False

        self.observe(cell_id)
        self.propagate(cell_id)
        self.steps += 1
        return True

    def _start(self):
        self.state = SolverState.SOLVING
        self.propagate(self.graph.seed_cell_id)

    def run(self) -> list[int]:
        """
        Solve the whole lattice.

        Returns:
            Tile id per cell, in cell id order

        Raises:
            ContradictionError: If a cell becomes unsatisfiable
            StepLimitError: If the step limit runs out first
        """
        max_steps = self.config.max_steps
        if max_steps is None:
            max_steps = len(self.graph)

        log.debug(
            "Solving %dx%dx%d lattice with %d tiles (max distance %d)",
            self.graph.width,
            self.graph.depth,
            self.graph.height,
            len(self.tileset),
            self.config.max_distance,
        )

        while True:
            if self.steps >= max_steps and not self.is_solved():
                raise StepLimitError(
                    f"Solver hit its limit of {max_steps} steps with "
                    f"{len(self.graph) - self.observed_count()} cell(s) unobserved"
                )
            if not self.step():
                break

        log.info("Solved %d cells in %d steps", len(self.graph), self.steps)
        return self.tile_ids()


def solve(
    tileset: TileSet,
    width: int,
    depth: int,
    height: int,
    config: SolverConfig | None = None,
) -> WFCSolver:
    """
    Build a lattice and solve it.

    Returns:
        The finished solver (see WFCSolver.tile_ids() / tile_grid())

    Raises:
        ContradictionError: If the run hits a contradiction
    """
    solver = WFCSolver(CellGraph(width, depth, height), tileset, config)
    solver.run()
    return solver
