from .state import SokobanMap, State


def is_goal(smap: SokobanMap, state: State) -> bool:
    """All boxes are on goals: boxes ⊆ goals (true for a level without boxes)."""
    return state.box_set <= smap.goals
