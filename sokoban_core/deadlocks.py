from __future__ import annotations
from typing import List, Tuple
from collections import OrderedDict

import numpy as np

from .state import Point, SokobanMap, State

_DEADLOCK_CACHE_MAX = 200000


class DeadlockDetector:
    """Frozen 2x2 block rule for one map.

    A 2x2 window whose four cells are all walls or boxes can never change:
    every box in it has a solid neighbor on each axis, so it can neither be
    pushed towards that neighbor nor have the player stand there to push it
    away. If such a window holds a box that is not on a goal, the state is
    unsolvable. Cells outside the grid count as walls.

    Only this pattern is detected. Other deadlocks are left to the search.
    """

    def __init__(self, smap: SokobanMap, cache_size: int = _DEADLOCK_CACHE_MAX) -> None:
        self.smap = smap
        # padded by one cell on every side, indexed [y + 1, x + 1]
        shape = (smap.height + 2, smap.width + 2)
        self._walls = np.ones(shape, dtype=bool)
        self._walls[1:-1, 1:-1] = False
        for x, y in smap.walls:
            self._walls[y + 1, x + 1] = True
        self._goals = np.zeros(shape, dtype=bool)
        for x, y in smap.goals:
            self._goals[y + 1, x + 1] = True
        # keyed by box tuple: the player position does not matter
        self._cache: "OrderedDict[Tuple[Point, ...], bool]" = OrderedDict()
        self._cache_size = cache_size

    def _box_grid(self, state: State) -> np.ndarray:
        boxes = np.zeros(self._walls.shape, dtype=bool)
        if state.boxes:
            xs, ys = zip(*state.boxes)
            boxes[np.asarray(ys) + 1, np.asarray(xs) + 1] = True
        return boxes

    def _frozen_mask(self, state: State) -> np.ndarray:
        """Boolean grid over window top-left corners (padded coordinates)."""
        boxes = self._box_grid(state)
        solid = self._walls | boxes
        off_goal = boxes & ~self._goals
        frozen = solid[:-1, :-1] & solid[:-1, 1:] & solid[1:, :-1] & solid[1:, 1:]
        loose_box = off_goal[:-1, :-1] | off_goal[:-1, 1:] | off_goal[1:, :-1] | off_goal[1:, 1:]
        return frozen & loose_box

    def frozen_windows(self, state: State) -> List[Point]:
        """Top-left (x, y) corners of all deadlocking windows; may be -1 on the border."""
        ys, xs = np.nonzero(self._frozen_mask(state))
        return [(int(x) - 1, int(y) - 1) for y, x in zip(ys, xs)]

    def is_deadlocked(self, state: State) -> bool:
        key = state.boxes
        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            return cached

        if state.box_set <= self.smap.goals:
            deadlocked = False
        else:
            deadlocked = bool(self._frozen_mask(state).any())

        self._cache[key] = deadlocked
        if len(self._cache) > self._cache_size:
            self._cache.popitem(last=False)
        return deadlocked


def is_deadlocked(smap: SokobanMap, state: State) -> bool:
    """One-off check; the search keeps a DeadlockDetector per map instead."""
    return DeadlockDetector(smap, cache_size=1).is_deadlocked(state)
