from __future__ import annotations
from typing import Any, Callable, Dict, Generator, List, Optional, Tuple
import inspect
import time

from sokoban_core.state import SokobanMap, State, serialize_state, deserialize_state
from sokoban_core.moves import MOVES, apply_move
from sokoban_core.deadlocks import DeadlockDetector
from sokoban_core.goal_check import is_goal
from .visited import VisitedIndex

Result = Dict[str, object]
DistanceHook = Callable[[int], Any]
StepHook = Callable[[State], Any]

EV_DISTANCE = "distance"
EV_STEP = "step"

_Event = Tuple[str, object]


def _result(success: bool, t0: float, nodes: int, distance: int,
            visited: VisitedIndex, path: Optional[str] = None) -> Result:
    res: Result = {
        "success": success,
        "nodes": nodes,
        "distance": distance,
        "visited": len(visited),
        "runtime": time.time() - t0,
    }
    if success:
        res["path"] = path
        res["solution_len"] = len(path)  # type: ignore[arg-type]
    return res


def _search(smap: SokobanMap, start: State) -> Generator[_Event, None, Result]:
    """Layered breadth-first search over serialized states.

    Yields hook events, (EV_DISTANCE, distance) once per layer and
    (EV_STEP, state) once per expanded state, and returns the result dict.
    The first complete state found is reached by a shortest move string.
    """
    t0 = time.time()
    detector = DeadlockDetector(smap)
    start_key = serialize_state(start)
    visited = VisitedIndex()
    visited.add(start_key, "")

    if is_goal(smap, start):
        return _result(True, t0, 0, 0, visited, "")
    if detector.is_deadlocked(start):
        # start is already in deadlock
        return _result(False, t0, 0, 0, visited)

    distance = 0
    expanded = 0
    current: List[str] = [start_key]
    while current:
        yield EV_DISTANCE, distance
        nxt: List[str] = []
        for key in current:
            state = deserialize_state(key)
            path = visited.path(key)
            yield EV_STEP, state
            expanded += 1
            for move in MOVES:
                ns = apply_move(smap, state, move, detector)
                if ns is None:
                    continue
                ns_key = serialize_state(ns)
                if ns_key in visited:
                    continue
                ns_path = f"{path}{move.code}"
                if is_goal(smap, ns):
                    return _result(True, t0, expanded, distance + 1, visited, ns_path)
                visited.add(ns_key, ns_path)
                nxt.append(ns_key)
        current = nxt
        distance += 1

    return _result(False, t0, expanded, distance, visited)


def bfs(
    smap: SokobanMap,
    start: State,
    on_distance: Optional[DistanceHook] = None,
    on_step: Optional[StepHook] = None,
) -> Result:
    """Runs the search, calling the optional hooks synchronously.

    Hook return values are ignored.
    """
    hooks = {EV_DISTANCE: on_distance, EV_STEP: on_step}
    # _search yields at every hook point so that bfs and bfs_async share one
    # search loop; its return value arrives as StopIteration.value
    events = _search(smap, start)
    while True:
        try:
            kind, payload = next(events)
        except StopIteration as stop:
            return stop.value
        hook = hooks[kind]
        if hook is not None:
            hook(payload)


async def bfs_async(
    smap: SokobanMap,
    start: State,
    on_distance: Optional[DistanceHook] = None,
    on_step: Optional[StepHook] = None,
) -> Result:
    """Same search as `bfs`; hooks returning awaitables are awaited."""
    hooks = {EV_DISTANCE: on_distance, EV_STEP: on_step}
    events = _search(smap, start)
    while True:
        try:
            kind, payload = next(events)
        except StopIteration as stop:
            return stop.value
        hook = hooks[kind]
        if hook is not None:
            ret = hook(payload)
            if inspect.isawaitable(ret):
                await ret


def solve(
    smap: SokobanMap,
    start: State,
    on_step: Optional[StepHook] = None,
    on_distance: Optional[DistanceHook] = None,
) -> Optional[str]:
    """Shortest move string (W/A/S/D), "" if already solved, None if unsolvable."""
    res = bfs(smap, start, on_distance=on_distance, on_step=on_step)
    if not res["success"]:
        return None
    return res["path"]  # type: ignore[return-value]


async def solve_async(
    smap: SokobanMap,
    start: State,
    on_step: Optional[StepHook] = None,
    on_distance: Optional[DistanceHook] = None,
) -> Optional[str]:
    res = await bfs_async(smap, start, on_distance=on_distance, on_step=on_step)
    if not res["success"]:
        return None
    return res["path"]  # type: ignore[return-value]
