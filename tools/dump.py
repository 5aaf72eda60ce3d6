#!/usr/bin/env python3
"""
tilevox - Tile Set Dumper

Prints a template's expanded tile catalog and its compatibility table,
optionally saving the table as JSON for inspection.
"""

import argparse
import json
import sys
from pathlib import Path

from tilevox.core.constants import BAN
from tilevox.core.direction import AXIS_DIRECTIONS
from tilevox.core.templates import Template, load_template
from tilevox.core.tileset import TileSet


def dump_catalog(tileset: TileSet):
    """Print one line per expanded tile."""
    print(f"Tile set '{tileset.name}': {len(tileset)} tiles, tile size {tileset.tile_size}")
    for tile_id, tile in enumerate(tileset.tiles):
        seed = "  (seed)" if tile_id == tileset.seed_id else ""
        print(
            f"  {tile_id:3d}  {tile.name:<24} {tile.tag.value:<6} "
            f"{str(tile.orientation):<10} {tile.voxels.count():4d} voxels{seed}"
        )


def compatibility_to_dict(tileset: TileSet) -> dict:
    """
    Allowed neighbors per source tile and direction.

    Returns:
        {"metadata": {...}, "neighbors": {"dirt": {"east": {"dirt": 0.8, ...}, ...}}}
    """
    neighbors = {}
    for source_id, source in enumerate(tileset.tiles):
        by_direction = {}
        for direction in AXIS_DIRECTIONS:
            weights = tileset.update(source_id, direction)
            allowed = {
                tileset[target_id].name: float(weight)
                for target_id, weight in enumerate(weights)
                if weight != BAN
            }
            if allowed:
                by_direction[direction.value] = allowed
        if by_direction:
            neighbors[source.name] = by_direction

    return {
        "metadata": {
            "template": tileset.name,
            "tiles": tileset.names,
            "seed_tile": tileset[tileset.seed_id].name,
            "rules": len(tileset.rules),
        },
        "neighbors": neighbors,
    }


def dump_compatibility(tileset: TileSet):
    """Print allowed neighbors; pairs without a line are banned."""
    table = compatibility_to_dict(tileset)["neighbors"]
    print(f"\nCompatibility ({len(table)} of {len(tileset)} tiles allow any neighbor):")
    for source, by_direction in table.items():
        print(f"  {source}")
        for direction, targets in by_direction.items():
            listing = ", ".join(f"{name} {weight:g}" for name, weight in targets.items())
            print(f"    {direction:<6} {listing}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Print a template's tile catalog and compatibility table",
    )
    parser.add_argument(
        "template",
        nargs="?",
        choices=[t.value for t in Template],
        default=Template.ROAD.value,
        help="Generation preset (default: road)",
    )
    parser.add_argument("--template-file", help="Load the template from a JSON file instead")
    parser.add_argument("--json", dest="json_path", help="Also save the compatibility table as JSON")

    args = parser.parse_args(argv)

    try:
        if args.template_file:
            tileset = TileSet.generate(load_template(args.template_file))
        else:
            tileset = TileSet.generate(Template(args.template))
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    dump_catalog(tileset)
    dump_compatibility(tileset)

    if args.json_path:
        output_path = Path(args.json_path)
        with open(output_path, "w") as f:
            json.dump(compatibility_to_dict(tileset), f, indent=2)
        print(f"\nSaved: {output_path}")


if __name__ == "__main__":
    main()
