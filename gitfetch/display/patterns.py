from collections.abc import Sequence

from gitfetch.display.contributions import ContributionGrid
from gitfetch.display.graph import render_graph
from gitfetch.display.schemas import VisualOptions

# 7x7 letter bitmaps; each digit is a day's intensity.
GLYPHS: dict[str, tuple[str, ...]] = {
    "A": ("0333330", "3000003", "3000003", "3333333", "3000003", "3000003", "3000003"),
    "B": ("3333330", "3000003", "3000003", "3333330", "3000003", "3000003", "3333330"),
    "C": ("0333330", "3000003", "3000000", "3000000", "3000000", "3000003", "0333330"),
    "D": ("3333330", "3000003", "3000003", "3000003", "3000003", "3000003", "3333330"),
    "E": ("3333333", "3000000", "3000000", "3333330", "3000000", "3000000", "3333333"),
    "F": ("3333333", "3000000", "3000000", "3333330", "3000000", "3000000", "3000000"),
    "G": ("0333330", "3000003", "3000000", "3033333", "3000003", "3000003", "0333330"),
    "H": ("3000003", "3000003", "3000003", "3333333", "3000003", "3000003", "3000003"),
    "I": ("3333333", "0003000", "0003000", "0003000", "0003000", "0003000", "3333333"),
    "J": ("3333333", "0000030", "0000030", "0000030", "0000030", "3000030", "0333300"),
    "K": ("3000030", "3000300", "3003000", "3330000", "3003000", "3000300", "3000030"),
    "L": ("3000000", "3000000", "3000000", "3000000", "3000000", "3000000", "3333333"),
    "M": ("3000003", "3300033", "3030303", "3003003", "3000003", "3000003", "3000003"),
    "N": ("3000003", "3300003", "3030003", "3003003", "3000303", "3000033", "3000003"),
    "O": ("0333330", "3000003", "3000003", "3000003", "3000003", "3000003", "0333330"),
    "P": ("3333330", "3000003", "3000003", "3333330", "3000000", "3000000", "3000000"),
    "Q": ("0333330", "3000003", "3000003", "3000003", "3000303", "3000030", "0333303"),
    "R": ("3333330", "3000003", "3000003", "3333330", "3003000", "3000300", "3000030"),
    "S": ("0333333", "3000000", "3000000", "0333330", "0000003", "0000003", "3333330"),
    "T": ("3333333", "0003000", "0003000", "0003000", "0003000", "0003000", "0003000"),
    "U": ("3000003", "3000003", "3000003", "3000003", "3000003", "3000003", "0333330"),
    "V": ("3000003", "3000003", "3000003", "3000003", "3000003", "0300030", "0033300"),
    "W": ("3000003", "3000003", "3000003", "3003003", "3030303", "3300033", "3000003"),
    "X": ("3000003", "0300030", "0030300", "0003000", "0030300", "0300030", "3000003"),
    "Y": ("3000003", "0300030", "0030300", "0003000", "0003000", "0003000", "0003000"),
    "Z": ("3333333", "0000030", "0000300", "0003000", "0030000", "0300000", "3333333"),
    " ": ("0000000", "0000000", "0000000", "0000000", "0000000", "0000000", "0000000"),
}

SHAPES: dict[str, tuple[str, ...]] = {
    "heart": (
        "0440440",
        "4224224",
        "4222224",
        "4222224",
        "0422240",
        "0042400",
        "0004000",
    ),
    "octocat": (
        "000400040",
        "004444444",
        "004133314",
        "004333334",
        "403433343",
        "040044400",
        "004444444",
    ),
}

PATTERN_ROWS = 7


class InvalidPatternError(ValueError):
    """Raised when text or shape input cannot be drawn as a grid."""


def _to_rows(bitmap: Sequence[str]) -> list[list[int]]:
    return [[int(cell) for cell in row] for row in bitmap]


def text_to_grid(text: str) -> list[list[int]]:
    """Spell `text` in 7x7 letters, one blank column after each character."""

    if not text:
        return []

    grid: list[list[int]] = [[] for _ in range(PATTERN_ROWS)]
    for char in text.upper():
        bitmap = GLYPHS.get(char)
        if bitmap is None:
            raise InvalidPatternError(
                "Text mode only supports A-Z and space. "
                f"Use shapes for predefined drawings. Got: {char!r}"
            )
        for row, cells in zip(grid, _to_rows(bitmap)):
            row.extend(cells)
            row.append(0)

    return grid


def shape_to_grid(names: Sequence[str]) -> list[list[int]]:
    """Draw named shapes left to right with one blank column between them."""

    if not names:
        return []

    grid: list[list[int]] = [[] for _ in range(PATTERN_ROWS)]
    for idx, name in enumerate(names):
        bitmap = SHAPES.get(name)
        if bitmap is None:
            raise InvalidPatternError(f"Unknown shape: {name}")
        for row, cells in zip(grid, _to_rows(bitmap)):
            if idx > 0:
                row.append(0)
            row.extend(cells)

    return grid


def render_pattern(matrix: Sequence[Sequence[int]], options: VisualOptions) -> list[str]:
    """Render a synthetic intensity matrix at full size without the month ruler."""

    return render_graph(
        ContributionGrid.from_pattern_grid(matrix),
        glyph=options.custom_box,
        palette=options.palette,
        show_month_header=False,
        spaced=options.spaced,
    )
