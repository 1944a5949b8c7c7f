from collections.abc import Mapping
from collections.abc import Sequence

from gitfetch.display.achievements import Achievement
from gitfetch.display.colors import Tone
from gitfetch.display.colors import colorize
from gitfetch.display.measure import pad_to_width
from gitfetch.display.measure import truncate_to_width
from gitfetch.display.measure import visible_width
from gitfetch.display.schemas import IssueSummary
from gitfetch.display.schemas import PullRequestSummary
from gitfetch.display.schemas import SearchBucket
from gitfetch.display.schemas import SummaryPayload

LABEL_WIDTH = 12
BIO_WIDTH = 80
TITLE_WIDTH = 24
REPO_WIDTH = 16
MAX_ITEMS = 3
MAX_LANGUAGES = 5
PROGRESS_BAR_WIDTH = 24
RULE = "─"


def label(text: str) -> str:
    return colorize(f"{text}:".ljust(LABEL_WIDTH), Tone.BOLD)


def section_title(title: str) -> list[str]:
    return [colorize(title, Tone.HEADER), colorize(RULE * len(title), Tone.MUTED)]


def header_line(payload: SummaryPayload, total: int) -> str:
    """One-line "<name> - <total> contributions this year" banner."""

    return (
        f"{colorize(payload.display_name, Tone.HEADER)} - "
        f"{colorize(str(total), Tone.ORANGE)} "
        f"{colorize('contributions this year', Tone.HEADER)}"
    )


def format_user_info(payload: SummaryPayload, total: int) -> list[str]:
    header = header_line(payload, total)
    lines = [header, colorize(RULE * visible_width(header), Tone.MUTED)]

    if payload.bio:
        bio = truncate_to_width(payload.bio.replace("\n", " "), BIO_WIDTH)
        lines.append(f"{label('Bio')} {bio}")
    if payload.company:
        lines.append(f"{label('Company')} {payload.company}")
    if payload.blog:
        lines.append(f"{label('Website')} {payload.blog}")
    lines.append(f"{label('Stars')} {payload.total_stars} ⭐")

    return lines


def render_progress_bar(percentage: float, width: int) -> str:
    width = max(1, width)
    capped = min(100.0, max(0.0, percentage))
    filled = min(width, round(capped / 100.0 * width))
    return colorize("▰" * filled, Tone.GREEN) + "▱" * (width - filled)


def format_languages(languages: Mapping[str, float]) -> list[str]:
    if not languages:
        return []

    lines = section_title("TOP LANGUAGES")
    ranked = sorted(languages.items(), key=lambda item: item[1], reverse=True)
    for name, percentage in ranked[:MAX_LANGUAGES]:
        if name.lower() == "jupyter notebook":
            name = "Jupyter"
        bar = render_progress_bar(percentage, PROGRESS_BAR_WIDTH)
        lines.append(f"{label(name)} {bar} {percentage:5.1f}%")
    return lines


def format_achievements(achievements: Sequence[Achievement]) -> list[str]:
    if not achievements:
        return []

    lines = section_title("ACHIEVEMENTS")
    labels = [
        f"{colorize(entry.icon, entry.tone)} {entry.label}" for entry in achievements
    ]
    label_width = max(visible_width(text) for text in labels)
    for text, entry in zip(labels, achievements):
        lines.append(f"{pad_to_width(text, label_width)}  {entry.value}")
    return lines


def _format_search_section(
    title: str, buckets: Sequence[tuple[str, SearchBucket]]
) -> list[str]:
    lines = section_title(title)
    label_width = max(len(name) for name, _ in buckets) + 2

    for name, bucket in buckets:
        padded = f"{name}:".ljust(label_width)
        lines.append(f"{colorize(padded, Tone.HEADER)} {bucket.total_count}")

        items = bucket.items[:MAX_ITEMS]
        if not items:
            lines.append(f"  {colorize('• None', Tone.MUTED)}")
            continue
        for item in items:
            bullet = f"• {truncate_to_width(item.title, TITLE_WIDTH)}"
            if item.repo:
                bullet += f" ({truncate_to_width(item.repo, REPO_WIDTH)})"
            lines.append(f"  {bullet}")

    return lines


def format_pull_requests(pull_requests: PullRequestSummary | None) -> list[str]:
    if pull_requests is None:
        return []
    return _format_search_section(
        "PULL REQUESTS",
        [
            ("Awaiting Review", pull_requests.awaiting_review),
            ("Your Open PRs", pull_requests.open),
            ("Mentions", pull_requests.mentions),
        ],
    )


def format_issues(issues: IssueSummary | None) -> list[str]:
    if issues is None:
        return []
    return _format_search_section(
        "ISSUES",
        [
            ("Assigned", issues.assigned),
            ("Created (open)", issues.created),
            ("Mentions", issues.mentions),
        ],
    )
