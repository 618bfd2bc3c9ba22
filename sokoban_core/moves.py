from collections import deque
from typing import TYPE_CHECKING, Dict, NamedTuple, Optional, Set, Tuple

from .state import Point, SokobanMap, State, sort_points

if TYPE_CHECKING:
    from .deadlocks import DeadlockDetector


class Move(NamedTuple):
    dx: int
    dy: int
    code: str

UP    = Move( 0, -1, "W")
LEFT  = Move(-1,  0, "A")
DOWN  = Move( 0,  1, "S")
RIGHT = Move( 1,  0, "D")

# expansion order used by the search
MOVES: Tuple[Move, ...] = (UP, LEFT, DOWN, RIGHT)
MOVES_BY_CODE: Dict[str, Move] = {m.code: m for m in MOVES}


def player_reachable(smap: SokobanMap, start: Point, state: Optional[State] = None) -> Set[Point]:
    """Cells reachable from `start` by walking (4-neighborhood).

    Walls always block; boxes block only when a state is given.
    """
    visited = {start}
    q = deque([start])

    while q:
        cur = q.popleft()
        for nb in smap.neighbors(cur):
            if nb in visited or smap.is_wall(nb):
                continue
            if state is not None and state.has_box(nb):
                continue
            visited.add(nb)
            q.append(nb)
    return visited


def step(smap: SokobanMap, state: State, move: Move) -> Optional[State]:
    """Move mechanics only: returns the next state or None if the move is illegal.

    Walking into a box pushes it one cell further; the push fails if the box
    would leave the grid, hit a wall or hit another box.
    """
    px, py = state.player
    target = (px + move.dx, py + move.dy)
    if not smap.is_inside(target) or smap.is_wall(target):
        return None
    if not state.has_box(target):
        return State(player=target, boxes=state.boxes)

    landing = (target[0] + move.dx, target[1] + move.dy)
    if not smap.is_inside(landing) or smap.is_wall(landing) or state.has_box(landing):
        return None
    new_boxes = [b for b in state.boxes if b != target]
    new_boxes.append(landing)
    # the player is on the old position of the box
    return State(player=target, boxes=sort_points(new_boxes))


def apply_move(
    smap: SokobanMap,
    state: State,
    move: Move,
    detector: "Optional[DeadlockDetector]" = None,
) -> Optional[State]:
    """Transition function: `step` plus deadlock pruning.

    Returns None for illegal moves and for moves that end in a deadlock.
    """
    nxt = step(smap, state, move)
    if nxt is None:
        return None
    if detector is None:
        from .deadlocks import DeadlockDetector
        detector = DeadlockDetector(smap)
    if detector.is_deadlocked(nxt):
        return None
    return nxt


def replay(smap: SokobanMap, state: State, moves: str) -> State:
    """Plays a string of move codes, raising ValueError on an illegal move."""
    cur = state
    for i, code in enumerate(moves):
        move = MOVES_BY_CODE.get(code)
        if move is None:
            raise ValueError(f"Unknown move code {code!r} at position {i}")
        nxt = step(smap, cur, move)
        if nxt is None:
            raise ValueError(f"Illegal move {code!r} at position {i}")
        cur = nxt
    return cur
