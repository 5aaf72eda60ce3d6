"""
tilevox - MagicaVoxel .vox Codec

Encodes a VoxelGrid as a single-model MagicaVoxel file (version 150) and
decodes such files back into a VoxelGrid.

File layout written by encode():

    "VOX " <version:u32>
    MAIN
      SIZE  <x:u32> <y:u32> <z:u32>
      XYZI  <count:u32> then count * <x:u8 y:u8 z:u8 color:u8>
      RGBA  256 * <r:u8 g:u8 b:u8 a:u8>

Every chunk is <id:4 bytes> <content size:u32> <children size:u32>
followed by its content and children. Color index 0 means "empty", so
palette entry i (0-based) in the RGBA chunk is color index i + 1.

Format reference:
https://github.com/ephtracy/voxel-model/blob/master/MagicaVoxel-file-format-vox.txt
"""

import struct

from .voxel_grid import Voxel, VoxelGrid

MAGIC = b"VOX "
VOX_VERSION = 150
VOX_MAX_SIZE = 256  # XYZI stores coordinates as single bytes
VOX_MAX_COLORS = 255  # Color index 0 is reserved for "empty"
CHUNK_HEADER = struct.Struct("<4sII")


class VoxFormatError(ValueError):
    """Raised when a grid cannot be encoded or .vox bytes cannot be decoded."""

    pass


def chunk(chunk_id: bytes, content: bytes, children: bytes = b"") -> bytes:
    """Pack a chunk id, its content and its child chunks."""
    if len(chunk_id) != 4:
        raise VoxFormatError(f"Chunk id must be 4 bytes, got {chunk_id!r}")
    return CHUNK_HEADER.pack(chunk_id, len(content), len(children)) + content + children


def build_palette(grid: VoxelGrid) -> dict[Voxel, int]:
    """
    Assign a .vox color index (1-255) to every distinct color in the grid.

    Raises:
        VoxFormatError: If the grid uses more than 255 colors
    """
    colors = grid.colors()
    if len(colors) > VOX_MAX_COLORS:
        raise VoxFormatError(
            f"Grid uses {len(colors)} colors, .vox supports at most {VOX_MAX_COLORS}"
        )
    return {color: index + 1 for index, color in enumerate(colors)}


def encode(grid: VoxelGrid) -> bytes:
    """
    Encode a voxel grid as .vox bytes.

    Args:
        grid: Grid to encode. Empty (alpha 0) voxels are omitted.

    Returns:
        Complete .vox file contents

    Raises:
        VoxFormatError: If a dimension exceeds 256 or there are too many colors
    """
    if max(grid.shape) > VOX_MAX_SIZE:
        raise VoxFormatError(
            f"Grid {grid.width}x{grid.depth}x{grid.height} exceeds the "
            f".vox model limit of {VOX_MAX_SIZE} per axis"
        )

    palette = build_palette(grid)

    size_content = struct.pack("<III", grid.width, grid.depth, grid.height)

    xyzi = bytearray()
    count = 0
    for x, y, z, voxel in grid.enumerate_cells():
        if voxel[3] == 0:
            continue
        xyzi.extend(struct.pack("<BBBB", x, y, z, palette[voxel]))
        count += 1
    xyzi_content = struct.pack("<I", count) + bytes(xyzi)

    entries = [(0, 0, 0, 0)] * 256
    for color, index in palette.items():
        entries[index - 1] = color
    rgba_content = b"".join(struct.pack("<BBBB", *color) for color in entries)

    children = (
        chunk(b"SIZE", size_content)
        + chunk(b"XYZI", xyzi_content)
        + chunk(b"RGBA", rgba_content)
    )
    return MAGIC + struct.pack("<I", VOX_VERSION) + chunk(b"MAIN", b"", children)


def _read_chunks(data: bytes, start: int, end: int) -> list[tuple[bytes, bytes]]:
    """Split a run of sibling chunks into (id, content) pairs, flattening children."""
    chunks = []
    offset = start
    while offset < end:
        if offset + CHUNK_HEADER.size > end:
            raise VoxFormatError(f"Truncated chunk header at offset {offset}")
        chunk_id, content_size, children_size = CHUNK_HEADER.unpack_from(data, offset)
        content_start = offset + CHUNK_HEADER.size
        children_start = content_start + content_size
        chunk_end = children_start + children_size
        if chunk_end > end:
            raise VoxFormatError(
                f"Chunk {chunk_id!r} at offset {offset} overruns the file"
            )
        chunks.append((chunk_id, data[content_start:children_start]))
        if children_size:
            chunks.extend(_read_chunks(data, children_start, chunk_end))
        offset = chunk_end
    return chunks


def decode(data: bytes, model_index: int = 0) -> VoxelGrid:
    """
    Decode .vox bytes into a VoxelGrid.

    Unknown chunks (scene graph, materials, layers) are skipped.

    Args:
        data: File contents
        model_index: Which SIZE/XYZI pair to decode (default: first)

    Returns:
        Decoded grid

    Raises:
        VoxFormatError: If the data is not a valid .vox file
    """
    if len(data) < 8 or data[:4] != MAGIC:
        raise VoxFormatError("Not a MagicaVoxel .vox file")

    chunks = _read_chunks(data, 8, len(data))
    if not chunks or chunks[0][0] != b"MAIN":
        raise VoxFormatError("Missing MAIN chunk")

    sizes = [content for chunk_id, content in chunks if chunk_id == b"SIZE"]
    models = [content for chunk_id, content in chunks if chunk_id == b"XYZI"]
    palettes = [content for chunk_id, content in chunks if chunk_id == b"RGBA"]

    if model_index >= len(sizes) or model_index >= len(models):
        raise VoxFormatError(
            f"Model {model_index} not found ({len(models)} model(s) in file)"
        )
    if not palettes:
        raise VoxFormatError("Missing RGBA palette chunk")
    if len(palettes[0]) != 256 * 4:
        raise VoxFormatError(f"RGBA chunk has {len(palettes[0])} bytes, expected 1024")

    if len(sizes[model_index]) < 12:
        raise VoxFormatError("SIZE chunk truncated")
    width, depth, height = struct.unpack("<III", sizes[model_index][:12])
    if not (0 < width <= VOX_MAX_SIZE and 0 < depth <= VOX_MAX_SIZE and 0 < height <= VOX_MAX_SIZE):
        raise VoxFormatError(f"Invalid model size {width}x{depth}x{height}")
    grid = VoxelGrid(width, depth, height)

    palette = [
        struct.unpack_from("<BBBB", palettes[0], i * 4) for i in range(256)
    ]

    xyzi = models[model_index]
    if len(xyzi) < 4:
        raise VoxFormatError("XYZI chunk truncated")
    (count,) = struct.unpack_from("<I", xyzi, 0)
    if len(xyzi) < 4 + count * 4:
        raise VoxFormatError(f"XYZI chunk truncated: {count} voxels declared")

    for i in range(count):
        x, y, z, color_index = struct.unpack_from("<BBBB", xyzi, 4 + i * 4)
        if x >= width or y >= depth or z >= height:
            raise VoxFormatError(f"Voxel ({x}, {y}, {z}) outside model bounds")
        if color_index == 0:
            continue
        grid.set(x, y, z, palette[color_index - 1])

    return grid
