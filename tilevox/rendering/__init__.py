"""
Preview rendering.

This package contains the Pillow renderer used to turn voxel grids into
top-down and side-view PNG images.
"""

from .pil_renderer import View, render_grid_to_image, render_side, render_top_down

__all__ = [
    "View",
    "render_grid_to_image",
    "render_side",
    "render_top_down",
]
