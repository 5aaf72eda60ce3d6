"""
tilevox - Tile Content Providers

Solid-fill voxel patterns for each kind of tile, keyed by content name.
Templates reference these names; content_for() builds the pattern.
"""

from typing import Callable

from ..formats.voxel_grid import VoxelGrid
from .constants import BROWN, CLEAR, GREEN, GREY


def dirt(width: int, depth: int, height: int) -> VoxelGrid:
    """Solid block of ground."""
    voxels = VoxelGrid(width, depth, height)
    voxels.fill(BROWN)
    return voxels


def grass(width: int, depth: int, height: int) -> VoxelGrid:
    """Ground with a vegetation top layer."""
    voxels = dirt(width, depth, height)
    voxels.data[:, :, height - 1] = GREEN
    return voxels


def sky(width: int, depth: int, height: int) -> VoxelGrid:
    """Open air."""
    voxels = VoxelGrid(width, depth, height)
    voxels.fill(CLEAR)
    return voxels


def road_inner(width: int, depth: int, height: int) -> VoxelGrid:
    """Paved bottom layer across the whole tile."""
    voxels = sky(width, depth, height)
    voxels.data[:, :, 0] = GREY
    return voxels


def road_edge(width: int, depth: int, height: int) -> VoxelGrid:
    """Paved bottom layer on the eastern half; the open side faces west."""
    voxels = sky(width, depth, height)
    voxels.data[width // 2 :, :, 0] = GREY
    return voxels


def road_corner(width: int, depth: int, height: int) -> VoxelGrid:
    """Paved bottom quarter in the south-west; the open corner faces north-east."""
    voxels = sky(width, depth, height)
    voxels.data[: width // 2 + 1, : depth // 2 + 1, 0] = GREY
    return voxels


CONTENT_PROVIDERS: dict[str, Callable[[int, int, int], VoxelGrid]] = {
    "dirt": dirt,
    "grass": grass,
    "sky": sky,
    "road_inner": road_inner,
    "road_edge": road_edge,
    "road_corner": road_corner,
}


def content_for(name: str, width: int, depth: int, height: int) -> VoxelGrid:
    """
    Build the voxel pattern for a content name.

    Args:
        name: Key into CONTENT_PROVIDERS (e.g. "dirt", "road_edge")
        width, depth, height: Pattern size in voxels

    Returns:
        New VoxelGrid with the pattern

    Raises:
        KeyError: If no provider is registered under name
    """
    try:
        provider = CONTENT_PROVIDERS[name]
    except KeyError:
        raise KeyError(
            f"Unknown tile content '{name}'. Available: {', '.join(sorted(CONTENT_PROVIDERS))}"
        ) from None
    return provider(width, depth, height)
