import logging
from dataclasses import dataclass
from enum import Enum
from functools import cached_property

from gitfetch.display.achievements import derive_achievements
from gitfetch.display.compose import SECTION_GAP
from gitfetch.display.compose import SECTION_INDENT
from gitfetch.display.compose import block_width
from gitfetch.display.compose import combine_columns
from gitfetch.display.compose import pair_side_by_side
from gitfetch.display.compose import stack_blocks
from gitfetch.display.contributions import ContributionGrid
from gitfetch.display.graph import CELL_WIDTH
from gitfetch.display.graph import GRAPH_MARGIN
from gitfetch.display.graph import graph_cell_width
from gitfetch.display.graph import render_graph
from gitfetch.display.schemas import SummaryPayload
from gitfetch.display.schemas import VisualOptions
from gitfetch.display.sections import format_achievements
from gitfetch.display.sections import format_issues
from gitfetch.display.sections import format_languages
from gitfetch.display.sections import format_pull_requests
from gitfetch.display.sections import format_user_info
from gitfetch.display.sections import header_line

logger = logging.getLogger(__name__)

SIDEBAR_GAP = 2
RESERVED_ROWS = 2
LANGUAGES_MIN_COLUMNS = 120
MIN_SIZED_WEEKS = 13


class Layout(Enum):
    FULL = "full"
    COMPACT = "compact"
    MINIMAL = "minimal"


LAYOUT_ORDER = (Layout.FULL, Layout.COMPACT, Layout.MINIMAL)


@dataclass(frozen=True)
class TerminalSize:
    """Snapshot of the client terminal taken once per render."""

    columns: int
    rows: int


@dataclass(frozen=True)
class Candidate:
    """Fully materialised layout together with its bounding box."""

    layout: Layout
    lines: tuple[str, ...]
    width: int
    height: int

    @classmethod
    def measure(cls, layout: Layout, lines: list[str]) -> "Candidate":
        return cls(
            layout=layout,
            lines=tuple(lines),
            width=block_width(lines),
            height=len(lines),
        )

    def fits(self, terminal: TerminalSize) -> bool:
        return (
            self.width <= terminal.columns
            and self.height <= terminal.rows - RESERVED_ROWS
        )


class LayoutNegotiator:
    """Pick the most detailed layout that fits the terminal.

    Each candidate is built in full, measured, and kept so the accepted one is
    printed exactly as it was measured.
    """

    def __init__(
        self,
        payload: SummaryPayload,
        options: VisualOptions,
        terminal: TerminalSize,
        timeline: str | None = None,
    ) -> None:
        self.payload = payload
        self.options = options
        self.terminal = terminal
        self.timeline = timeline
        self._candidates: dict[Layout, Candidate] = {}

    @cached_property
    def grid(self) -> ContributionGrid:
        return ContributionGrid.from_calendar(self.payload.contribution_graph)

    @cached_property
    def total(self) -> int:
        return self.grid.total()

    def render(self) -> list[str]:
        if self.options.graph_timeline:
            return (self.timeline or "").splitlines()

        if self.options.graph_only:
            return self._graph_lines(self.options.width)

        return list(self.negotiate().lines)

    def negotiate(self) -> Candidate:
        for layout in LAYOUT_ORDER:
            candidate = self.candidate(layout)
            if candidate.fits(self.terminal):
                logger.debug(
                    "Layout %s fits %dx%d in %dx%d",
                    layout.value,
                    candidate.width,
                    candidate.height,
                    self.terminal.columns,
                    self.terminal.rows,
                )
                return candidate
            logger.debug(
                "Layout %s needs %dx%d, terminal is %dx%d",
                layout.value,
                candidate.width,
                candidate.height,
                self.terminal.columns,
                self.terminal.rows,
            )

        return self.candidate(Layout.MINIMAL)

    def candidate(self, layout: Layout) -> Candidate:
        if layout not in self._candidates:
            if layout is Layout.FULL:
                lines = self._build_full()
            elif layout is Layout.COMPACT:
                lines = self._build_compact()
            else:
                lines = self._build_minimal()
            self._candidates[layout] = Candidate.measure(layout, lines)
        return self._candidates[layout]

    def graph_budget(self, layout: Layout) -> int:
        """Cells the graph may occupy, margin included."""

        if self.options.width is not None:
            return graph_cell_width(self.options.width)

        columns = self.terminal.columns
        if layout is Layout.FULL:
            return max(50, 3 * max(50, columns - 10) // 4)
        if layout is Layout.COMPACT:
            return 3 * max(40, columns - 40) // 4
        return columns

    def graph_weeks(self, layout: Layout) -> int:
        if self.options.width is not None:
            return self.options.width

        weeks = max(0, (self.graph_budget(layout) - GRAPH_MARGIN) // CELL_WIDTH)
        if layout is not Layout.MINIMAL:
            weeks = max(MIN_SIZED_WEEKS, weeks)
        return min(weeks, len(self.grid.weeks))

    def _graph_lines(self, weeks: int | None) -> list[str]:
        return render_graph(
            self.grid,
            weeks,
            self.options.height,
            glyph=self.options.custom_box,
            palette=self.options.palette,
            show_month_header=not self.options.no_date,
            spaced=self.options.spaced,
        )

    def _achievement_lines(self) -> list[str]:
        if self.options.no_achievements:
            return []
        return format_achievements(derive_achievements(self.grid))

    def _activity_columns(self, budget: int) -> list[list[str]]:
        pr_lines = [] if self.options.no_pr else format_pull_requests(
            self.payload.pull_requests
        )
        issue_lines = [] if self.options.no_issues else format_issues(
            self.payload.issues
        )

        if pr_lines and issue_lines:
            needed = (
                len(SECTION_INDENT)
                + block_width(pr_lines)
                + len(SECTION_GAP)
                + block_width(issue_lines)
            )
            if needed > budget:
                return []
            return [pr_lines, issue_lines]
        return [lines for lines in (pr_lines, issue_lines) if lines]

    def _build_full(self) -> list[str]:
        left = [] if self.options.no_grid else self._graph_lines(
            self.graph_weeks(Layout.FULL)
        )
        budget = self.graph_budget(Layout.FULL)
        columns = self._activity_columns(budget)
        if columns:
            if left:
                left.append("")
            left.extend(combine_columns(columns, budget))

        sidebar: list[list[str]] = []
        if not self.options.no_account:
            sidebar.append(format_user_info(self.payload, self.total))
        if (
            not self.options.no_languages
            and self.terminal.columns >= LANGUAGES_MIN_COLUMNS
        ):
            sidebar.append(format_languages(self.payload.languages))
        sidebar.append(self._achievement_lines())

        return pair_side_by_side(left, stack_blocks(sidebar), SIDEBAR_GAP)

    def _build_compact(self) -> list[str]:
        if self.options.no_grid:
            left = [header_line(self.payload, self.total)]
        else:
            left = self._graph_lines(self.graph_weeks(Layout.COMPACT))

        sidebar: list[list[str]] = []
        if not self.options.no_account:
            sidebar.append([header_line(self.payload, self.total)])
        sidebar.append(self._achievement_lines())

        return pair_side_by_side(left, stack_blocks(sidebar), SIDEBAR_GAP)

    def _build_minimal(self) -> list[str]:
        if self.options.no_grid:
            return [header_line(self.payload, self.total)]
        return self._graph_lines(self.graph_weeks(Layout.MINIMAL))
