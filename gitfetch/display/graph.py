from collections.abc import Sequence

from gitfetch.display.colors import RESET
from gitfetch.display.colors import background
from gitfetch.display.colors import foreground
from gitfetch.display.contributions import ContributionGrid
from gitfetch.display.contributions import Week

DEFAULT_WEEKS = 52
DEFAULT_DAYS = 7
GRAPH_MARGIN = 4
CELL_WIDTH = 2
MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def contribution_level(count: int) -> int:
    """Map daily contribution count to a heatmap level in range 0..4."""

    if count <= 0:
        return 0
    if count <= 2:
        return 1
    if count <= 6:
        return 2
    if count <= 12:
        return 3
    return 4


def graph_cell_width(weeks: int) -> int:
    """Terminal cells taken by a graph row of `weeks` columns, margin included."""

    return GRAPH_MARGIN + weeks * CELL_WIDTH


def _cell(count: int, glyph: str, palette: Sequence[str], spaced: bool) -> str:
    color = palette[contribution_level(count)]
    if spaced:
        return f"{foreground(color)}{glyph}{RESET} "
    return f"{background(color)}  {RESET}"


def build_month_ruler(weeks: Sequence[Week]) -> str:
    """Label each week column that starts a new month with its abbreviation."""

    if not weeks:
        return ""

    ruler = ""
    for idx, week in enumerate(weeks):
        first_date = week.first_date
        if first_date is None:
            continue

        month_name = MONTH_ABBREVIATIONS[first_date.month - 1]
        if idx == 0:
            ruler += month_name
            continue

        previous_date = weeks[idx - 1].first_date
        if previous_date is None or previous_date.month == first_date.month:
            continue

        target_width = (idx + 1) * CELL_WIDTH
        gap = max(1, target_width - len(ruler) - len(month_name))
        ruler += " " * gap + month_name

    return " " * GRAPH_MARGIN + ruler


def render_graph(
    grid: ContributionGrid,
    weeks_width: int | None = None,
    days_height: int | None = None,
    *,
    glyph: str,
    palette: Sequence[str],
    show_month_header: bool,
    spaced: bool,
) -> list[str]:
    """Render the most recent weeks of `grid` as styled terminal rows."""

    if not grid.weeks:
        return [""] if show_month_header else []

    num_weeks = DEFAULT_WEEKS if weeks_width is None else weeks_width
    num_days = DEFAULT_DAYS if days_height is None else days_height
    num_days = min(DEFAULT_DAYS, max(1, num_days))
    weeks = grid.recent_weeks(num_weeks)

    lines: list[str] = []
    if show_month_header:
        lines.append(build_month_ruler(weeks))

    for day_idx in range(num_days):
        row = " " * GRAPH_MARGIN
        for week in weeks:
            if day_idx < len(week.days):
                row += _cell(
                    week.days[day_idx].contribution_count, glyph, palette, spaced
                )
        lines.append(row + RESET)

    return lines
