from collections.abc import Mapping
from collections.abc import Sequence
from dataclasses import dataclass
import datetime
from typing import Any


@dataclass(frozen=True)
class Day:
    """Single calendar day with its contribution count."""

    contribution_count: int
    date: datetime.date | None = None


@dataclass(frozen=True)
class Week:
    """Column of days, oldest first (conventionally Sunday to Saturday)."""

    days: tuple[Day, ...]

    @property
    def first_date(self) -> datetime.date | None:
        if not self.days:
            return None
        return self.days[0].date


def _parse_count(raw_count: Any) -> int:
    if isinstance(raw_count, bool) or not isinstance(raw_count, int):
        return 0
    return max(0, raw_count)


def _parse_date(raw_date: Any) -> datetime.date | None:
    if not isinstance(raw_date, str):
        return None
    try:
        return datetime.date.fromisoformat(raw_date)
    except ValueError:
        return None


@dataclass(frozen=True)
class ContributionGrid:
    """Chronologically ordered weeks of daily contribution counts."""

    weeks: tuple[Week, ...] = ()

    @classmethod
    def from_calendar(cls, doc: Any) -> "ContributionGrid":
        """Build a grid from GitHub-style `weeks[].contributionDays[]` data.

        Malformed entries never raise: counts default to 0 and dates to None.
        """

        if not isinstance(doc, Sequence) or isinstance(doc, str):
            return cls()

        weeks: list[Week] = []
        for raw_week in doc:
            raw_days = (
                raw_week.get("contributionDays")
                if isinstance(raw_week, Mapping)
                else None
            )
            if not isinstance(raw_days, Sequence) or isinstance(raw_days, str):
                weeks.append(Week(days=()))
                continue

            days: list[Day] = []
            for raw_day in raw_days:
                if not isinstance(raw_day, Mapping):
                    days.append(Day(contribution_count=0))
                    continue
                days.append(
                    Day(
                        contribution_count=_parse_count(
                            raw_day.get("contributionCount")
                        ),
                        date=_parse_date(raw_day.get("date")),
                    )
                )
            weeks.append(Week(days=tuple(days)))

        return cls(weeks=tuple(weeks))

    @classmethod
    def from_pattern_grid(cls, matrix: Sequence[Sequence[int]]) -> "ContributionGrid":
        """Turn a 7-row intensity matrix into one week per column."""

        if not matrix or not matrix[0]:
            return cls()

        weeks: list[Week] = []
        for col_idx in range(len(matrix[0])):
            days: list[Day] = []
            for row_idx in range(7):
                intensity = 0
                if row_idx < len(matrix) and col_idx < len(matrix[row_idx]):
                    intensity = _parse_count(matrix[row_idx][col_idx])
                days.append(Day(contribution_count=intensity))
            weeks.append(Week(days=tuple(days)))

        return cls(weeks=tuple(weeks))

    def counts(self) -> list[int]:
        return [day.contribution_count for week in self.weeks for day in week.days]

    def total(self) -> int:
        return sum(self.counts())

    def streaks(self) -> tuple[int, int]:
        """Return `(current, longest)` runs of days with at least one contribution."""

        most_recent_first = list(reversed(self.counts()))

        current = 0
        for count in most_recent_first:
            if count <= 0:
                break
            current += 1

        longest = 0
        running = 0
        for count in most_recent_first:
            if count > 0:
                running += 1
                longest = max(longest, running)
            else:
                running = 0

        return current, longest

    def recent_weeks(self, limit: int) -> tuple[Week, ...]:
        if limit <= 0:
            return ()
        return self.weeks[-limit:]
