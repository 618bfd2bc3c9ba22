from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Tuple

__all__ = [
    "Point",
    "SokobanMap",
    "State",
    "sort_points",
    "serialize_point",
    "deserialize_point",
    "serialize_state",
    "deserialize_state",
]

Point = Tuple[int, int]


def sort_points(points: Iterable[Point]) -> Tuple[Point, ...]:
    """Canonical order: by row (y), then by column (x)."""
    return tuple(sorted(points, key=lambda p: (p[1], p[0])))


@dataclass(frozen=True, slots=True)
class SokobanMap:
    """
    Static part of a level, shared by every state of one solve.

    Coordinates are (x, y): x across the width, y across the height.
    """

    width: int
    height: int
    walls: FrozenSet[Point]
    goals: FrozenSet[Point]


    def is_inside(self, p: Point) -> bool:
        return 0 <= p[0] < self.width and 0 <= p[1] < self.height


    def is_wall(self, p: Point) -> bool:
        return p in self.walls


    def is_goal_cell(self, p: Point) -> bool:
        return p in self.goals


    def neighbors(self, p: Point) -> Iterable[Point]:
        """4-neighborhood without diagonals."""
        x, y = p
        if y > 0: yield (x, y - 1)
        if y + 1 < self.height: yield (x, y + 1)
        if x > 0: yield (x - 1, y)
        if x + 1 < self.width: yield (x + 1, y)


@dataclass(frozen=True, slots=True, eq=False)
class State:
    """
    Immutable game configuration: player position and box positions.

    `boxes` is kept in canonical (y, x) order; `box_set` mirrors it for
    occupancy tests. Two states are "the same" only if their serializations
    match, there is no structural __eq__.
    """

    player: Point
    boxes: Tuple[Point, ...]
    box_set: FrozenSet[Point] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "box_set", frozenset(self.boxes))
        if len(self.box_set) != len(self.boxes):
            raise ValueError("Two boxes share a cell")


    @classmethod
    def create(cls, player: Point, boxes: Iterable[Point]) -> "State":
        """Build a state from boxes in any order."""
        return cls(player=tuple(player), boxes=sort_points(tuple(b) for b in boxes))


    def has_box(self, p: Point) -> bool:
        return p in self.box_set


# ---- serialization: the only notion of state identity

def serialize_point(p: Point) -> str:
    return f"{p[0]},{p[1]}"


def deserialize_point(text: str) -> Point:
    x, y = text.split(",")
    return (int(x), int(y))


def serialize_state(state: State) -> str:
    """"px,py/bx,by/..." with boxes in canonical order."""
    return "/".join(serialize_point(p) for p in (state.player, *state.boxes))


def deserialize_state(key: str) -> State:
    points: List[Point] = [deserialize_point(part) for part in key.split("/")]
    return State.create(points[0], points[1:])
