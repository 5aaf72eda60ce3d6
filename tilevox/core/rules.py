"""
tilevox - Compatibility Rules

Declarative adjacency rules. Each rule names a source tag, a target tag,
the directions it covers and a weight, plus an optional orientation
predicate for edge/corner tiles. The first rule that matches a
(source tile, direction, target tile) triple decides its weight.

Tag pairs with no matching rule are banned. This default is deliberate
and easy to trip over: a typo in a rule table shows up as unexpected
bans, not as an error. RuleTable.unmatched_pairs() lists the tag pairs
that fall through to the default so tables can be audited.
"""

from dataclasses import dataclass
from typing import Callable, Iterable

from .constants import BAN
from .direction import AXIS_DIRECTIONS, HORIZONTAL_DIRECTIONS, Direction, Rotation
from .tile import Orientation, Tag, Tile


class RuleError(ValueError):
    """Raised when a rule declaration cannot be parsed."""

    pass


# =============================================================================
# Direction Classes
# =============================================================================

DIRECTION_CLASSES: dict[str, frozenset[Direction]] = {
    "any": frozenset(AXIS_DIRECTIONS),
    "horizontal": frozenset(HORIZONTAL_DIRECTIONS),
    "vertical": frozenset((Direction.UP, Direction.DOWN)),
}


def parse_directions(value: str | Iterable[str]) -> frozenset[Direction]:
    """
    Resolve a direction class name, a direction name, or a list of either.

    Args:
        value: e.g. "horizontal", "up", or ["east", "west"]

    Returns:
        Set of axis-aligned directions

    Raises:
        RuleError: If a name is unknown or names a diagonal direction
    """
    names = [value] if isinstance(value, str) else list(value)
    if not names:
        raise RuleError("Rule must cover at least one direction")

    directions: set[Direction] = set()
    for name in names:
        key = name.strip().lower()
        if key in DIRECTION_CLASSES:
            directions |= DIRECTION_CLASSES[key]
            continue
        try:
            direction = Direction.parse(key)
        except ValueError as e:
            raise RuleError(str(e)) from None
        if direction not in AXIS_DIRECTIONS:
            raise RuleError(f"Rules apply to lattice directions only, got '{name}'")
        directions.add(direction)
    return frozenset(directions)


# =============================================================================
# Orientation Predicates
# =============================================================================

OrientationPredicate = Callable[[Direction, Orientation, Orientation], bool]

# Which target corners open toward a neighbor lying in the given direction
CORNERS_OPEN_TOWARD = {
    Direction.EAST: (Direction.NORTH_WEST, Direction.SOUTH_WEST),
    Direction.WEST: (Direction.NORTH_EAST, Direction.SOUTH_EAST),
    Direction.NORTH: (Direction.SOUTH_EAST, Direction.SOUTH_WEST),
    Direction.SOUTH: (Direction.NORTH_EAST, Direction.NORTH_WEST),
}


def _any(direction: Direction, source: Orientation, target: Orientation) -> bool:
    return True


def _both_invariant(direction: Direction, source: Orientation, target: Orientation) -> bool:
    return source.is_invariant and target.is_invariant


def _target_edge_faces(direction: Direction, source: Orientation, target: Orientation) -> bool:
    """Target is an edge facing the same way as the step toward it."""
    return target.is_edge and target.direction == direction


def _target_edge_faces_back(direction: Direction, source: Orientation, target: Orientation) -> bool:
    """Target is an edge facing back toward the source."""
    return target.is_edge and direction == target.direction.rotated_z(Rotation.R180)


def _target_corner_opens(direction: Direction, source: Orientation, target: Orientation) -> bool:
    """Target is a corner whose open side borders the source."""
    return target.is_corner and target.direction in CORNERS_OPEN_TOWARD.get(direction, ())


def _edges_aligned(direction: Direction, source: Orientation, target: Orientation) -> bool:
    """
    Two edges continue each other.

    Either the source faces the step and the target faces back at it, or
    both face the same way while the step runs along the edge.
    """
    if not (source.is_edge and target.is_edge):
        return False
    s, t = source.direction, target.direction
    if s == direction and t == s.rotated_z(Rotation.R180):
        return True
    return s.is_perpendicular(direction) and s == t


ORIENTATION_PREDICATES: dict[str, OrientationPredicate] = {
    "any": _any,
    "both_invariant": _both_invariant,
    "target_edge_faces": _target_edge_faces,
    "target_edge_faces_back": _target_edge_faces_back,
    "target_corner_opens": _target_corner_opens,
    "edges_aligned": _edges_aligned,
}


# =============================================================================
# Rules
# =============================================================================

@dataclass(frozen=True)
class CompatibilityRule:
    """One row of the rule table."""

    source: Tag
    target: Tag
    directions: frozenset[Direction]
    weight: float
    orientation: str = "any"

    def __post_init__(self):
        if self.weight < 0 and self.weight != BAN:
            raise RuleError(
                f"Rule {self.source}->{self.target} has negative weight {self.weight}; "
                f"use {BAN} to ban"
            )
        if self.orientation not in ORIENTATION_PREDICATES:
            raise RuleError(
                f"Unknown orientation predicate '{self.orientation}'. "
                f"Available: {', '.join(sorted(ORIENTATION_PREDICATES))}"
            )

    def matches(self, source: Tile, direction: Direction, target: Tile) -> bool:
        if source.tag is not self.source or target.tag is not self.target:
            return False
        if direction not in self.directions:
            return False
        predicate = ORIENTATION_PREDICATES[self.orientation]
        return predicate(direction, source.orientation, target.orientation)

    @classmethod
    def from_dict(cls, data: dict) -> "CompatibilityRule":
        """
        Parse a rule declaration.

        Expected keys: "source", "target", "directions", "weight" and
        optionally "orientation". A weight of "ban" is accepted as BAN.

        Raises:
            RuleError: If a key is missing or a value is invalid
        """
        try:
            source = Tag(data["source"])
            target = Tag(data["target"])
            directions = parse_directions(data["directions"])
            raw_weight = data["weight"]
            weight = BAN if raw_weight == "ban" else float(raw_weight)
        except KeyError as e:
            raise RuleError(f"Rule {data!r} is missing key {e}") from None
        except (TypeError, ValueError) as e:
            raise RuleError(f"Rule {data!r}: {e}") from None

        return cls(
            source=source,
            target=target,
            directions=directions,
            weight=weight,
            orientation=data.get("orientation", "any"),
        )


class RuleTable:
    """Ordered rule list with first-match lookup and an implicit ban."""

    def __init__(self, rules: Iterable[CompatibilityRule] = ()):
        self.rules: list[CompatibilityRule] = list(rules)

    @classmethod
    def from_dicts(cls, rows: Iterable[dict]) -> "RuleTable":
        return cls(CompatibilityRule.from_dict(row) for row in rows)

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self):
        return iter(self.rules)

    def weight(self, source: Tile, direction: Direction, target: Tile) -> float:
        """
        Compatibility of placing target next to source in direction.

        Returns:
            The first matching rule's weight, or BAN when nothing matches
        """
        for rule in self.rules:
            if rule.matches(source, direction, target):
                return rule.weight
        return BAN

    def unmatched_pairs(self, tags: Iterable[Tag] = tuple(Tag)) -> list[tuple[Tag, Tag]]:
        """Tag pairs that no rule mentions and are therefore always banned."""
        tags = list(tags)
        covered = {(rule.source, rule.target) for rule in self.rules}
        return [(s, t) for s in tags for t in tags if (s, t) not in covered]
