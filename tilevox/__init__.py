"""
tilevox - 3D voxel map generation with wave function collapse.
"""

__version__ = "0.1.0"
