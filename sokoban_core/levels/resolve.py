from __future__ import annotations
from itertools import groupby
from typing import List, Tuple

from ..parser import parse_level_str
from ..state import SokobanMap, State


def parse_level_id(level_id: str) -> Tuple[str, int]:
    """"pack.txt#3" -> ("pack.txt", 3); a bare path selects level 0.

    Raises ValueError when the part after '#' is not an integer.
    """
    path, sep, index = level_id.rpartition("#")
    if not sep:
        return level_id, 0
    try:
        return path, int(index)
    except ValueError:
        raise ValueError(f"Level index {index!r} in {level_id!r} is not an integer") from None


def split_levels(text: str) -> List[str]:
    """A pack holds one level per run of non-blank lines."""
    return [
        "\n".join(lines)
        for blank, lines in groupby(text.splitlines(), key=lambda ln: not ln.strip())
        if not blank
    ]


def load_level_text(level_id: str) -> str:
    """Raw text of one level of a pack; OSError, ValueError or IndexError on failure."""
    path, index = parse_level_id(level_id)
    with open(path, "r", encoding="utf-8") as f:
        levels = split_levels(f.read())
    if not levels:
        raise ValueError(f"No levels found in {path}")
    if not 0 <= index < len(levels):
        raise IndexError(f"Level {index} out of range for {path} ({len(levels)} levels)")
    return levels[index]


def load_level_by_id(level_id: str) -> Tuple[SokobanMap, State]:
    return parse_level_str(load_level_text(level_id))
