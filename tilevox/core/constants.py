"""
tilevox - Colors, Dimensions and Solver Defaults

Shared constants for tile content colors, lattice dimensions and solver
tuning used across the generator, the assembler and the tools.
"""

from typing import Tuple

# Type alias for RGBA color
RGBAColor = Tuple[int, int, int, int]

# Tile content colors (RGBA). Alpha 0 means "no voxel".
BROWN: RGBAColor = (120, 80, 50, 255)
GREEN: RGBAColor = (90, 120, 20, 255)
GREY: RGBAColor = (108, 108, 127, 255)
CLEAR: RGBAColor = (0, 0, 0, 0)

# Voxel pattern size of a single tile (width, depth, height)
TILE_WIDTH = 3
TILE_DEPTH = 3
TILE_HEIGHT = 3

# Default lattice dimensions in tiles
MAP_WIDTH = 8
MAP_DEPTH = 8
MAP_HEIGHT = 8

# Compatibility weight marking an absolutely forbidden neighbor.
# Never a valid probability; never written into a cell's weight vector.
BAN = -1.0

# Solver defaults
MAX_PROPAGATION_DISTANCE = 4  # Edges walked outward from each observation
UNINFORMED_ENTROPY = float("inf")  # Entropy of a cell no signal has reached
