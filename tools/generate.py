#!/usr/bin/env python3
"""
tilevox - Map Generator

Generates a voxel map from a template with wave function collapse and
writes it as a MagicaVoxel .vox file.
"""

import argparse
import logging
import sys
from pathlib import Path

from tilevox.core.constants import MAP_DEPTH, MAP_HEIGHT, MAP_WIDTH, MAX_PROPAGATION_DISTANCE
from tilevox.core.generator import generate_map
from tilevox.core.solver import ContradictionError, StepLimitError
from tilevox.core.templates import Template, load_template
from tilevox.formats.vox import encode
from tilevox.rendering.pil_renderer import View, render_grid_to_image


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate a 3D voxel map with wave function collapse",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Generate the default 8x8x8 road map (writes road_map.vox):
    python tools/generate.py road

  Reproducible map with a preview image:
    python tools/generate.py road --seed 42 --preview road.png

  Larger map, retrying with new seeds on contradiction:
    python tools/generate.py road -W 16 -D 16 -H 6 --seed 1 --attempts 5

  Custom template file:
    python tools/generate.py --template-file my_template.json -o my_map.vox
        """,
    )
    parser.add_argument(
        "template",
        nargs="?",
        choices=[t.value for t in Template],
        default=Template.ROAD.value,
        help="Generation preset (default: road)",
    )
    parser.add_argument("--template-file", help="Load the template from a JSON file instead")
    parser.add_argument("-W", "--width", type=int, default=MAP_WIDTH, help=f"Lattice width in tiles (default: {MAP_WIDTH})")
    parser.add_argument("-D", "--depth", type=int, default=MAP_DEPTH, help=f"Lattice depth in tiles (default: {MAP_DEPTH})")
    parser.add_argument("-H", "--height", type=int, default=MAP_HEIGHT, help=f"Lattice height in tiles (default: {MAP_HEIGHT})")
    parser.add_argument("-s", "--seed", type=int, help="Random seed (default: nondeterministic)")
    parser.add_argument(
        "--max-distance",
        type=int,
        default=MAX_PROPAGATION_DISTANCE,
        help=f"Propagation distance per observation (default: {MAX_PROPAGATION_DISTANCE})",
    )
    parser.add_argument(
        "-a", "--attempts", type=int, default=1, help="Attempts before giving up on contradiction (default: 1)"
    )
    parser.add_argument("-o", "--output", help="Output .vox path (default: <template>_map.vox)")
    parser.add_argument("--preview", help="Also write a PNG preview to this path")
    parser.add_argument(
        "--view",
        choices=[v.value for v in View],
        default=View.TOP.value,
        help="Preview projection (default: top)",
    )
    parser.add_argument("--scale", type=int, default=4, help="Preview pixel scale (default: 4)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.template_file:
            template = load_template(args.template_file)
            template_name = template.name
        else:
            template = Template(args.template)
            template_name = template.value
        output_path = Path(args.output) if args.output else Path(f"{template_name}_map.vox")

        print(f"Generating {args.width}x{args.depth}x{args.height} '{template_name}' map...")
        result = generate_map(
            template,
            width=args.width,
            depth=args.depth,
            height=args.height,
            seed=args.seed,
            max_distance=args.max_distance,
            attempts=args.attempts,
        )
        data = encode(result.grid)
    except (ContradictionError, StepLimitError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    try:
        output_path.write_bytes(data)
        print(f"Saved: {output_path} ({result.grid.width}x{result.grid.depth}x{result.grid.height}, {result.grid.count()} voxels)")

        if args.preview:
            img = render_grid_to_image(result.grid, View(args.view), scale=args.scale)
            img.save(args.preview)
            print(f"Saved: {args.preview} ({img.width}x{img.height})")
    except OSError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Solved in {result.attempts} attempt(s)")
    for name, count in result.tile_counts().items():
        print(f"  {name:<24} {count:5d}")


if __name__ == "__main__":
    main()
