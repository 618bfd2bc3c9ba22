from .state import SokobanMap, State
from .parser import (
    TOK_FLOOR, TOK_WALL, TOK_GOAL, TOK_BOX, TOK_BOX_ON_GOAL,
    TOK_PLAYER, TOK_PLAYER_ON_GOAL,
)


def render_ascii(smap: SokobanMap, state: State) -> str:
    """ASCII visualization of the state, in the same tiles the parser reads."""
    out_lines = []
    for y in range(smap.height):
        row_chars = []
        for x in range(smap.width):
            p = (x, y)
            if smap.is_wall(p):
                row_chars.append(TOK_WALL)
                continue
            has_goal = smap.is_goal_cell(p)
            if p == state.player:
                row_chars.append(TOK_PLAYER_ON_GOAL if has_goal else TOK_PLAYER)
            elif state.has_box(p):
                row_chars.append(TOK_BOX_ON_GOAL if has_goal else TOK_BOX)
            else:
                row_chars.append(TOK_GOAL if has_goal else TOK_FLOOR)
        out_lines.append(''.join(row_chars))
    return "\n".join(out_lines)
