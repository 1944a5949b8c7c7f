from collections.abc import Sequence

from gitfetch.display.measure import pad_to_width
from gitfetch.display.measure import visible_width

SECTION_INDENT = "    "
SECTION_GAP = "   "


def block_width(lines: Sequence[str]) -> int:
    return max((visible_width(line) for line in lines), default=0)


def combine_columns(
    columns: Sequence[Sequence[str]], width_budget: int
) -> list[str]:
    """Lay columns out side by side, wrapping into row-groups past `width_budget`."""

    measured = [(column, block_width(column)) for column in columns if column]
    if not measured:
        return []

    row_groups: list[list[tuple[Sequence[str], int]]] = []
    current_group: list[tuple[Sequence[str], int]] = []
    current_width = len(SECTION_INDENT)

    for column, width in measured:
        projected = width if not current_group else len(SECTION_GAP) + width
        if current_group and current_width + projected > width_budget:
            row_groups.append(current_group)
            current_group = []
            current_width = len(SECTION_INDENT)
            projected = width

        current_width += projected
        current_group.append((column, width))

    row_groups.append(current_group)

    combined: list[str] = []
    for group_idx, group in enumerate(row_groups):
        height = max(len(column) for column, _ in group)
        for line_idx in range(height):
            parts: list[str] = []
            for col_idx, (column, width) in enumerate(group):
                text = column[line_idx] if line_idx < len(column) else ""
                if col_idx < len(group) - 1:
                    parts.append(pad_to_width(text, width) + SECTION_GAP)
                else:
                    parts.append(text)
            combined.append((SECTION_INDENT + "".join(parts)).rstrip())

        if group_idx < len(row_groups) - 1:
            combined.append("")

    return combined


def pair_side_by_side(
    left_lines: Sequence[str], right_lines: Sequence[str], gap: int
) -> list[str]:
    """Place `right_lines` beside `left_lines`, aligned on the widest left line."""

    max_left_width = block_width(left_lines)
    paired: list[str] = []
    for idx in range(max(len(left_lines), len(right_lines))):
        left = left_lines[idx] if idx < len(left_lines) else ""
        right = right_lines[idx] if idx < len(right_lines) else ""
        paired.append(pad_to_width(left, max_left_width) + " " * gap + right)
    return paired


def stack_blocks(blocks: Sequence[Sequence[str]]) -> list[str]:
    """Join non-empty blocks vertically with one blank line between them."""

    stacked: list[str] = []
    for block in blocks:
        if not block:
            continue
        if stacked:
            stacked.append("")
        stacked.extend(block)
    return stacked
