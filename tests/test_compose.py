from gitfetch.display.colors import Tone
from gitfetch.display.colors import colorize
from gitfetch.display.compose import combine_columns
from gitfetch.display.compose import pair_side_by_side
from gitfetch.display.compose import stack_blocks


def test_combine_columns_fits_one_row_group() -> None:
    left = ["a" * 10, "a" * 10]
    right = ["b" * 8, "b" * 8]

    lines = combine_columns([left, right], width_budget=30)

    assert lines == ["    " + "a" * 10 + "   " + "b" * 8] * 2


def test_combine_columns_wraps_when_budget_exceeded() -> None:
    left = ["a" * 10, "a" * 10]
    right = ["b" * 8, "b" * 8]

    lines = combine_columns([left, right], width_budget=20)

    assert lines == [
        "    " + "a" * 10,
        "    " + "a" * 10,
        "",
        "    " + "b" * 8,
        "    " + "b" * 8,
    ]


def test_combine_columns_pads_shorter_columns_and_trims() -> None:
    first = ["x" * 10, "yyyy"]
    second = ["z"]

    lines = combine_columns([first, second], width_budget=80)

    assert lines == ["    " + "x" * 10 + "   z", "    yyyy"]


def test_combine_columns_pads_by_visible_width() -> None:
    styled = colorize("abc", Tone.HEADER)

    lines = combine_columns([[styled, "abcdef"], ["z", "z"]], width_budget=80)

    assert lines[0] == "    " + styled + "      z"
    assert lines[1] == "    abcdef   z"


def test_combine_columns_skips_empty_columns() -> None:
    assert combine_columns([[], []], width_budget=80) == []
    assert combine_columns([[], ["only"]], width_budget=80) == ["    only"]


def test_pair_side_by_side_aligns_on_widest_left_line() -> None:
    lines = pair_side_by_side(["ab", "abcd"], ["1"], gap=2)

    assert lines == ["ab    1", "abcd  "]


def test_pair_side_by_side_with_longer_right_side() -> None:
    lines = pair_side_by_side(["left"], ["r1", "r2", "r3"], gap=2)

    assert lines == ["left  r1", "      r2", "      r3"]


def test_pair_side_by_side_ignores_styles_when_padding() -> None:
    styled = colorize("ab", Tone.GREEN)

    lines = pair_side_by_side([styled, "abcd"], ["x", "y"], gap=1)

    assert lines[0] == styled + "   x"


def test_stack_blocks_separates_non_empty_blocks() -> None:
    assert stack_blocks([["a"], [], ["b", "c"]]) == ["a", "", "b", "c"]
    assert stack_blocks([[], []]) == []
