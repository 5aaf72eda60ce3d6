"""
tilevox - PIL Renderer

PIL-based rendering for generating PNG previews of voxel grids.
Used by the generate and visualize tools to create static images.
"""

from enum import Enum

try:
    from PIL import Image
except ImportError:
    raise ImportError("Pillow library required. Install with: pip install Pillow")

from ..formats.voxel_grid import VoxelGrid, Voxel

BACKGROUND_COLOR = (32, 32, 40, 255)


class View(Enum):
    """Projection used for a preview image."""

    TOP = "top"
    SIDE = "side"

    def __str__(self) -> str:
        return self.value


def _shade(voxel: Voxel, level: int, levels: int) -> tuple[int, int, int, int]:
    """Darken a voxel color by how far it sits from the viewer (level 0 = nearest)."""
    factor = 1.0 - 0.5 * level / max(levels - 1, 1)
    r, g, b, a = voxel
    return (int(r * factor), int(g * factor), int(b * factor), a)


def _put_scaled(pixels, x: int, y: int, color, scale: int):
    for sy in range(scale):
        for sx in range(scale):
            pixels[x * scale + sx, y * scale + sy] = color


def render_top_down(
    grid: VoxelGrid,
    scale: int = 1,
    shade: bool = True,
    background: tuple[int, int, int, int] = BACKGROUND_COLOR,
) -> Image.Image:
    """
    Render the grid as seen from above.

    Each pixel shows the highest non-empty voxel of its column. North (+y)
    is at the top of the image.

    Args:
        grid: Voxel grid to render
        scale: Pixel scale factor (default: 1)
        shade: Darken lower voxels so height reads in the image
        background: Color for empty columns

    Returns:
        PIL RGBA Image of size (width * scale, depth * scale)
    """
    if scale < 1:
        raise ValueError(f"scale must be at least 1, got {scale}")

    img = Image.new("RGBA", (grid.width * scale, grid.depth * scale), background)
    pixels = img.load()
    assert pixels is not None

    occupied = grid.occupied()
    for x in range(grid.width):
        for y in range(grid.depth):
            column = occupied[x, y]
            if not column.any():
                continue
            # Highest occupied z in this column
            z = grid.height - 1 - int(column[::-1].argmax())
            color = grid.get(x, y, z)
            if shade:
                color = _shade(color, grid.height - 1 - z, grid.height)
            _put_scaled(pixels, x, grid.depth - 1 - y, color, scale)

    return img


def render_side(
    grid: VoxelGrid,
    scale: int = 1,
    shade: bool = True,
    background: tuple[int, int, int, int] = BACKGROUND_COLOR,
) -> Image.Image:
    """
    Render the grid as seen from the south, looking north.

    Each pixel shows the nearest non-empty voxel along y. Up (+z) is at the
    top of the image.

    Args:
        grid: Voxel grid to render
        scale: Pixel scale factor (default: 1)
        shade: Darken voxels further from the viewer
        background: Color for empty rows

    Returns:
        PIL RGBA Image of size (width * scale, height * scale)
    """
    if scale < 1:
        raise ValueError(f"scale must be at least 1, got {scale}")

    img = Image.new("RGBA", (grid.width * scale, grid.height * scale), background)
    pixels = img.load()
    assert pixels is not None

    occupied = grid.occupied()
    for x in range(grid.width):
        for z in range(grid.height):
            row = occupied[x, :, z]
            if not row.any():
                continue
            y = int(row.argmax())
            color = grid.get(x, y, z)
            if shade:
                color = _shade(color, y, grid.depth)
            _put_scaled(pixels, x, grid.height - 1 - z, color, scale)

    return img


def render_grid_to_image(grid: VoxelGrid, view: View = View.TOP, scale: int = 1) -> Image.Image:
    """Render a grid with the given projection."""
    if view is View.SIDE:
        return render_side(grid, scale=scale)
    return render_top_down(grid, scale=scale)
