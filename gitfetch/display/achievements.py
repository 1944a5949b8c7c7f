from dataclasses import dataclass

from gitfetch.display.colors import Tone
from gitfetch.display.contributions import ContributionGrid


@dataclass(frozen=True)
class Achievement:
    icon: str
    tone: Tone
    label: str
    value: str


# Highest tier first; only the first one met is awarded.
VOLUME_TIERS: tuple[tuple[int, str, Tone, str], ...] = (
    (10000, "💎", Tone.MAGENTA, "10k+"),
    (5000, "👑", Tone.YELLOW, "5k+"),
    (1000, "🎖️", Tone.CYAN, "1k+"),
    (100, "🏆", Tone.YELLOW, "100+"),
)


def _days(count: int) -> str:
    return f"{count} day" if count == 1 else f"{count} days"


def derive_from_aggregates(current: int, longest: int, total: int) -> list[Achievement]:
    """Build streak and volume badges from precomputed grid aggregates."""

    achievements: list[Achievement] = []
    if current > 0:
        achievements.append(
            Achievement("🔥", Tone.RED, "Current Streak", _days(current))
        )
    if longest > 0:
        achievements.append(Achievement("⭐", Tone.YELLOW, "Best Streak", _days(longest)))

    for threshold, icon, tone, value in VOLUME_TIERS:
        if total >= threshold:
            achievements.append(Achievement(icon, tone, "Contributions", value))
            break

    return achievements


def derive_achievements(grid: ContributionGrid) -> list[Achievement]:
    current, longest = grid.streaks()
    return derive_from_aggregates(current, longest, grid.total())
