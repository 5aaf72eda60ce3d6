"""
Core generation functionality.

This package contains directions, tiles, templates, the compatibility
table, the cell graph, the wave function collapse solver and the voxel
assembler.
"""

from .assembler import assemble
from .cell_graph import CellGraph, Edge
from .direction import Direction, Rotation
from .generator import GenerationResult, generate_map
from .rules import CompatibilityRule, RuleError, RuleTable
from .solver import (
    ContradictionError,
    SolverConfig,
    SolverState,
    StepLimitError,
    WFCSolver,
    solve,
)
from .templates import Template, TemplateError, load_template
from .tile import Orientation, Tag, Tile
from .tileset import TileSet, UnknownTileError

__all__ = [
    "assemble",
    "CellGraph",
    "Edge",
    "Direction",
    "Rotation",
    "GenerationResult",
    "generate_map",
    "CompatibilityRule",
    "RuleError",
    "RuleTable",
    "ContradictionError",
    "SolverConfig",
    "SolverState",
    "StepLimitError",
    "WFCSolver",
    "solve",
    "Template",
    "TemplateError",
    "load_template",
    "Orientation",
    "Tag",
    "Tile",
    "TileSet",
    "UnknownTileError",
]
