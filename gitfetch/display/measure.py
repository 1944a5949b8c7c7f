import re

from wcwidth import wcswidth
from wcwidth import wcwidth

ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")
ELLIPSIS = "…"


def strip_ansi(text: str) -> str:
    return ANSI_PATTERN.sub("", text)


def visible_width(text: str) -> int:
    """Return the number of terminal cells `text` occupies once styles are removed.

    Wide codepoints count as two cells and combining marks as zero.
    """

    clean = strip_ansi(text)
    width = wcswidth(clean)
    if width >= 0:
        return width
    # wcswidth gives up on control characters; count them as zero instead.
    return sum(max(wcwidth(char), 0) for char in clean)


def truncate_to_width(text: str, max_width: int) -> str:
    """Cut `text` so that it plus a trailing ellipsis fits in `max_width` cells."""

    if visible_width(text) <= max_width:
        return text
    if max_width < 1:
        return ""

    budget = max_width - visible_width(ELLIPSIS)
    kept: list[str] = []
    used = 0
    for char in text:
        char_width = visible_width(char)
        if used + char_width > budget:
            break
        kept.append(char)
        used += char_width
    return "".join(kept) + ELLIPSIS


def pad_to_width(text: str, width: int) -> str:
    return text + " " * max(0, width - visible_width(text))
