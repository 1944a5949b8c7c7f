from enum import Enum

RESET = "\x1b[0m"


class Tone(Enum):
    """Named ANSI styles used by the side sections."""

    HEADER = "\x1b[38;2;118;215;161m"
    ORANGE = "\x1b[38;2;255;184;108m"
    GREEN = "\x1b[38;2;80;250;123m"
    MUTED = "\x1b[38;2;68;71;90m"
    BOLD = "\x1b[1m"
    RED = "\x1b[91m"
    YELLOW = "\x1b[93m"
    CYAN = "\x1b[96m"
    MAGENTA = "\x1b[95m"


def colorize(text: str, tone: Tone) -> str:
    return f"{tone.value}{text}{RESET}"


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Parse `#rrggbb` (or `rrggbb`); malformed components become 0."""

    raw = hex_color.lstrip("#")
    components: list[int] = []
    for start in (0, 2, 4):
        try:
            components.append(int(raw[start : start + 2], 16))
        except ValueError:
            components.append(0)
    return components[0], components[1], components[2]


def foreground(hex_color: str) -> str:
    r, g, b = hex_to_rgb(hex_color)
    return f"\x1b[38;2;{r};{g};{b}m"


def background(hex_color: str) -> str:
    r, g, b = hex_to_rgb(hex_color)
    return f"\x1b[48;2;{r};{g};{b}m"
