import os

import pytest

from sokoban_core.levels.resolve import (
    load_level_by_id, load_level_text, parse_level_id, split_levels,
)
from sokoban_core.parser import ParseError
from search.bfs import solve

EXAMPLES = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
                        "sokoban_core", "levels", "examples", "small.txt")


def test_parse_level_id():
    assert parse_level_id("packs/a.txt#3") == ("packs/a.txt", 3)
    assert parse_level_id("packs/a.txt") == ("packs/a.txt", 0)
    assert parse_level_id("dir#1/a.txt#2") == ("dir#1/a.txt", 2)


@pytest.mark.parametrize("level_id", ["packs/a.txt#x", "packs/a.txt#", "packs/a.txt#1.5"])
def test_parse_level_id_rejects_bad_index(level_id):
    with pytest.raises(ValueError, match="not an integer"):
        parse_level_id(level_id)


def test_split_levels():
    blocks = split_levels("a\nb\n\n\n c\n  \nd\n")
    assert blocks == ["a\nb", " c", "d"]


def test_examples_load():
    smap, s = load_level_by_id(f"{EXAMPLES}#0")
    assert solve(smap, s) == "D"
    smap, s = load_level_by_id(f"{EXAMPLES}#2")
    assert len(s.boxes) == 2
    assert solve(smap, s) is not None


def test_index_out_of_range():
    with pytest.raises(IndexError):
        load_level_text(f"{EXAMPLES}#9")
    with pytest.raises(IndexError):
        load_level_text(f"{EXAMPLES}#-1")


def test_empty_pack(tmp_path):
    p = tmp_path / "empty.txt"
    p.write_text("\n\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_level_text(str(p))


def test_bad_level_in_pack(tmp_path):
    p = tmp_path / "bad.txt"
    p.write_text("#####\n#wb+#\n#####\n\n####\n#w.##\n", encoding="utf-8")
    load_level_by_id(f"{p}#0")
    with pytest.raises(ParseError):
        load_level_by_id(f"{p}#1")
