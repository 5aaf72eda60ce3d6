"""
Voxel storage and file formats.

This package contains the numpy-backed voxel grid and the MagicaVoxel
.vox encoder/decoder.
"""

from .voxel_grid import VoxelGrid
from .vox import VoxFormatError, decode, encode

__all__ = [
    "VoxelGrid",
    "VoxFormatError",
    "decode",
    "encode",
]
