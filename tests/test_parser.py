import pytest

from sokoban_core.parser import ParseError, parse_level_str, parse_sokoban

LVL = """
#####
#wb+#
#####
"""


def test_parse_basic():
    smap, s = parse_level_str(LVL)
    assert smap.width == 5 and smap.height == 3
    assert smap.goals == frozenset({(3, 1)})
    assert len(smap.walls) == 12
    assert s.player == (1, 1)
    assert s.boxes == ((2, 1),)
    assert smap.walls.isdisjoint(smap.goals)


def test_box_and_player_on_goal():
    smap, s = parse_level_str("""
######
#WB..#
#..b+#
######
""")
    assert s.player == (1, 1)
    assert (1, 1) in smap.goals
    assert (2, 1) in smap.goals and (2, 1) in s.box_set
    assert smap.goals == frozenset({(1, 1), (2, 1), (4, 2)})


def test_boxes_in_canonical_order():
    _, s = parse_level_str("""
######
#..b.#
#b.w.#
#.++.#
######
""")
    # row first, then column
    assert s.boxes == ((3, 1), (1, 2))


def test_blank_lines_indentation_and_crlf_are_ignored():
    text = "\r\n\r\n   #####  \r\n\r\n\t#wb+#\r\n#####\r\n\r\n"
    parsed = parse_sokoban(text)
    assert parsed is not None
    smap, s = parsed
    assert (smap.width, smap.height) == (5, 3)
    assert s.player == (1, 1)


@pytest.mark.parametrize("text", [
    "",
    "\n   \n\n",
    # rows of different length
    "#####\n#wb+#\n####\n",
    # unknown tile
    "#####\n#w$+#\n#####\n",
    # no player
    "#####\n#.b+#\n#####\n",
    # box cut off from the player
    "#######\n#w+#b.#\n#######\n",
    # goal cut off from the player
    "#######\n#wb+#+#\n#######\n",
])
def test_invalid_levels(text):
    assert parse_sokoban(text) is None
    with pytest.raises(ParseError):
        parse_level_str(text)


def test_parse_error_is_value_error():
    with pytest.raises(ValueError, match="length"):
        parse_level_str("#####\n#wb+#\n####\n")


def test_grid_without_walls():
    smap, s = parse_level_str("w.b+")
    assert smap.walls == frozenset()
    assert (smap.width, smap.height) == (4, 1)
    assert s.boxes == ((2, 0),)
