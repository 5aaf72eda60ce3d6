#!/usr/bin/env python3
"""
tilevox - Map Visualizer

Renders MagicaVoxel .vox files as PNG images (top-down or side view).
"""

import argparse
import sys
from pathlib import Path

from tilevox.formats.vox import VoxFormatError, decode
from tilevox.rendering.pil_renderer import View, render_grid_to_image


def render_file(input_path: Path, output_path: Path, view: View, scale: int):
    """Render a single .vox file to PNG."""
    grid = decode(input_path.read_bytes())
    img = render_grid_to_image(grid, view, scale=scale)
    img.save(output_path)
    print(f"Saved: {output_path} ({img.width}x{img.height})")


def render_directory(input_dir: Path, output_dir: Path, view: View, scale: int):
    """Render every .vox file in a directory."""
    output_dir.mkdir(parents=True, exist_ok=True)

    vox_files = sorted(input_dir.glob("*.vox"))
    if not vox_files:
        print(f"No .vox files found in {input_dir}")
        return

    print(f"Rendering {len(vox_files)} maps from {input_dir}...")
    for vox_file in vox_files:
        render_file(vox_file, output_dir / f"{vox_file.stem}_{view}.png", view, scale)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Render tilevox .vox maps as PNG images",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Render a map from above:
    python tools/visualize.py road_map.vox

  Side view at 8x scale:
    python tools/visualize.py road_map.vox road_side.png --view side --scale 8

  Render every map in a directory:
    python tools/visualize.py maps/ renders/
        """,
    )
    parser.add_argument("input", help="Path to .vox file or directory of .vox files")
    parser.add_argument("output", nargs="?", help="Output PNG file or directory (optional)")
    parser.add_argument(
        "--view",
        choices=[v.value for v in View],
        default=View.TOP.value,
        help="Projection (default: top)",
    )
    parser.add_argument("--scale", type=int, default=4, help="Pixel scale factor (default: 4)")

    args = parser.parse_args(argv)

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: {args.input} not found")
        sys.exit(1)

    view = View(args.view)
    try:
        if input_path.is_file():
            output_path = Path(args.output) if args.output else input_path.with_name(f"{input_path.stem}_{view}.png")
            render_file(input_path, output_path, view, args.scale)
        else:
            output_dir = Path(args.output) if args.output else Path("renders") / input_path.name
            render_directory(input_path, output_dir, view, args.scale)
    except (VoxFormatError, ValueError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
