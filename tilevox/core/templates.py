"""
tilevox - Generation Templates

A template declares the base tiles of a catalog (name, content provider,
tag, orientation), the voxel size of each tile, the seed tile and the
compatibility rules. Presets ship as JSON documents in data/templates/;
any file with the same layout can be loaded with load_template().

Template document layout:

    {
      "name": "road",
      "tile_size": [3, 3, 3],
      "seed_tile": "dirt",
      "tiles": [
        {"name": "dirt", "content": "dirt", "tag": "dirt",
         "orientation": "invariant"},
        {"name": "road-edge", "content": "road_edge", "tag": "road",
         "orientation": {"edge": "west"}}
      ],
      "rules": [
        {"source": "dirt", "target": "dirt", "directions": "horizontal",
         "weight": 0.8}
      ]
    }
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .direction import Direction
from .models import CONTENT_PROVIDERS, content_for
from .rules import RuleTable
from .tile import Orientation, Tag, Tile

TEMPLATES_DIR = Path(__file__).parent.parent / "data" / "templates"


class TemplateError(ValueError):
    """Raised when a template document is malformed."""

    pass


@dataclass(frozen=True)
class TileDeclaration:
    """A base tile as declared in a template, before rotation expansion."""

    name: str
    content: str
    tag: Tag
    orientation: Orientation

    def build(self, tile_size: tuple[int, int, int]) -> Tile:
        width, depth, height = tile_size
        return Tile(
            name=self.name,
            voxels=content_for(self.content, width, depth, height),
            tag=self.tag,
            orientation=self.orientation,
        )


@dataclass
class TemplateDefinition:
    """Parsed template: base tiles, tile size, seed tile and rules."""

    name: str
    tile_size: tuple[int, int, int]
    seed_tile: str
    tiles: list[TileDeclaration]
    rules: RuleTable
    description: str = ""
    source_path: Path | None = field(default=None, compare=False)

    def base_tiles(self) -> list[Tile]:
        """Build the declared tiles with their voxel content."""
        return [declaration.build(self.tile_size) for declaration in self.tiles]


class Template(Enum):
    """Named generation presets shipped with the package."""

    ROAD = "road"

    def __str__(self) -> str:
        return self.value

    @property
    def path(self) -> Path:
        return TEMPLATES_DIR / f"{self.value}.json"

    def load(self) -> TemplateDefinition:
        return load_template(self.path)


def parse_orientation(value) -> Orientation:
    """
    Parse "invariant", {"edge": "<cardinal>"} or {"corner": "<diagonal>"}.

    Raises:
        TemplateError: If the value has another shape
    """
    if value == "invariant":
        return Orientation.invariant()
    if isinstance(value, dict) and len(value) == 1:
        ((kind, direction_name),) = value.items()
        try:
            direction = Direction.parse(direction_name)
            if kind == "edge":
                return Orientation.edge(direction)
            if kind == "corner":
                return Orientation.corner(direction)
        except ValueError as e:
            raise TemplateError(f"Invalid orientation {value!r}: {e}") from None
    raise TemplateError(
        f"Invalid orientation {value!r}; expected \"invariant\", "
        "{\"edge\": <direction>} or {\"corner\": <direction>}"
    )


def parse_template(data: dict, source_path: Path | None = None) -> TemplateDefinition:
    """
    Build a TemplateDefinition from a decoded template document.

    Args:
        data: Decoded JSON document
        source_path: File the document came from (for error messages)

    Returns:
        Parsed template

    Raises:
        TemplateError: If a required key is missing or a value is invalid
    """
    where = f" in {source_path}" if source_path else ""
    try:
        name = data["name"]
        tile_size = tuple(int(n) for n in data["tile_size"])
        seed_tile = data["seed_tile"]
        tile_rows = data["tiles"]
        rule_rows = data["rules"]
    except KeyError as e:
        raise TemplateError(f"Template is missing key {e}{where}") from None
    except (TypeError, ValueError) as e:
        raise TemplateError(f"Invalid tile_size{where}: {e}") from None

    if len(tile_size) != 3 or min(tile_size) <= 0:
        raise TemplateError(f"tile_size must be three positive integers{where}, got {data['tile_size']!r}")

    if not tile_rows:
        raise TemplateError(f"Template '{name}' declares no tiles{where}")

    tiles = []
    seen_names = set()
    for row in tile_rows:
        try:
            declaration = TileDeclaration(
                name=row["name"],
                content=row["content"],
                tag=Tag(row["tag"]),
                orientation=parse_orientation(row.get("orientation", "invariant")),
            )
        except KeyError as e:
            raise TemplateError(f"Tile {row!r} is missing key {e}{where}") from None
        except ValueError as e:
            raise TemplateError(f"Tile {row!r}{where}: {e}") from None
        if declaration.content not in CONTENT_PROVIDERS:
            raise TemplateError(
                f"Tile '{declaration.name}' uses unknown content '{declaration.content}'{where}"
            )
        if declaration.name in seen_names:
            raise TemplateError(f"Duplicate tile name '{declaration.name}'{where}")
        seen_names.add(declaration.name)
        tiles.append(declaration)

    try:
        rules = RuleTable.from_dicts(rule_rows)
    except ValueError as e:
        raise TemplateError(f"Invalid rule{where}: {e}") from None

    return TemplateDefinition(
        name=name,
        tile_size=tile_size,
        seed_tile=seed_tile,
        tiles=tiles,
        rules=rules,
        description=data.get("description", ""),
        source_path=source_path,
    )


def load_template(path: str | Path) -> TemplateDefinition:
    """
    Load a template document from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        TemplateError: If the document is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Template file not found: {path}")

    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise TemplateError(f"Template {path} is not valid JSON: {e}") from None

    return parse_template(data, source_path=path)
