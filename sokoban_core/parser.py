import re
from typing import List, Optional, Tuple

from .state import Point, SokobanMap, State, sort_points
from .moves import player_reachable

TOK_FLOOR = "."
TOK_WALL = "#"
TOK_GOAL = "+"
TOK_BOX = "b"
TOK_BOX_ON_GOAL = "B"
TOK_PLAYER = "w"
TOK_PLAYER_ON_GOAL = "W"

GOAL_TOKENS = frozenset((TOK_GOAL, TOK_BOX_ON_GOAL, TOK_PLAYER_ON_GOAL))
BOX_TOKENS = frozenset((TOK_BOX, TOK_BOX_ON_GOAL))
PLAYER_TOKENS = frozenset((TOK_PLAYER, TOK_PLAYER_ON_GOAL))
TOKENS = frozenset((TOK_FLOOR, TOK_WALL)) | GOAL_TOKENS | BOX_TOKENS | PLAYER_TOKENS

_LINE_BREAK = re.compile(r"\r*\n")


class ParseError(ValueError):
    """The text does not describe a playable level."""


def parse_level_str(level_str: str) -> Tuple[SokobanMap, State]:
    """Parses an ASCII level into (map, initial state).

    Supported characters:
      '.': floor
      '#': wall
      '+': goal
      'b': box
      'B': box on goal
      'w': player
      'W': player on goal
    Lines are stripped and blank lines are ignored. Every remaining row must
    have the same length, and every box and goal must be reachable from the
    player (walls block, boxes do not).
    """
    lines = [line.strip() for line in _LINE_BREAK.split(level_str)]
    lines = [line for line in lines if line]
    if not lines:
        raise ParseError("Empty level")
    height = len(lines)
    width = len(lines[0])
    for r, line in enumerate(lines):
        if len(line) != width:
            raise ParseError(f"Row {r} has length {len(line)}, expected {width}")

    walls: List[Point] = []
    goals: List[Point] = []
    boxes: List[Point] = []
    player: Optional[Point] = None

    for y, line in enumerate(lines):
        for x, ch in enumerate(line):
            if ch not in TOKENS:
                raise ParseError(f"Unknown tile {ch!r} at ({x}, {y})")
            if ch == TOK_WALL:
                walls.append((x, y))
            if ch in GOAL_TOKENS:
                goals.append((x, y))
            if ch in BOX_TOKENS:
                boxes.append((x, y))
            elif ch in PLAYER_TOKENS:
                player = (x, y)

    if player is None:
        raise ParseError("No player 'w' or 'W' found in level")

    smap = SokobanMap(width=width, height=height,
                      walls=frozenset(walls), goals=frozenset(goals))
    reachable = player_reachable(smap, player)
    for p in boxes:
        if p not in reachable:
            raise ParseError(f"Box at {p} is not reachable from the player")
    for p in goals:
        if p not in reachable:
            raise ParseError(f"Goal at {p} is not reachable from the player")

    return smap, State(player=player, boxes=sort_points(boxes))


def parse_sokoban(level_str: str) -> Optional[Tuple[SokobanMap, State]]:
    """Like parse_level_str, but returns None instead of raising."""
    try:
        return parse_level_str(level_str)
    except ParseError:
        return None


def parse_level_file(path: str) -> Tuple[SokobanMap, State]:
    with open(path, "r", encoding="utf-8") as f:
        return parse_level_str(f.read())
