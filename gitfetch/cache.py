from datetime import UTC
from datetime import datetime
from datetime import timedelta
from typing import Any

from sqlalchemy import delete
from sqlalchemy import select
from sqlalchemy.orm import Session

from gitfetch.models import CachedSnapshot

Snapshot = tuple[dict[str, Any], dict[str, Any]]


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class SnapshotCache:
    """Stores `(user_data, stats)` per username, tagged with a build version.

    Snapshots written under another version are invisible to both getters.
    """

    def __init__(self, db: Session, ttl_minutes: int, version: str) -> None:
        self.db = db
        self.ttl = timedelta(minutes=max(0, ttl_minutes))
        self.version = version

    def _current(self, username: str) -> CachedSnapshot | None:
        return self.db.scalar(
            select(CachedSnapshot).where(
                CachedSnapshot.username == username.lower(),
                CachedSnapshot.version == self.version,
            )
        )

    def get(self, username: str) -> Snapshot | None:
        """Return the snapshot if it is still within its freshness window."""

        snapshot = self._current(username)
        if snapshot is None:
            return None
        if _as_utc(snapshot.cached_at) < datetime.now(UTC) - self.ttl:
            return None
        return snapshot.user_data, snapshot.stats_data

    def get_stale(self, username: str) -> Snapshot | None:
        """Return the snapshot regardless of its age."""

        snapshot = self._current(username)
        if snapshot is None:
            return None
        return snapshot.user_data, snapshot.stats_data

    def put(
        self, username: str, user_data: dict[str, Any], stats: dict[str, Any]
    ) -> None:
        normalized_username = username.lower()
        snapshot = self.db.scalar(
            select(CachedSnapshot).where(
                CachedSnapshot.username == normalized_username
            )
        )
        if snapshot is None:
            snapshot = CachedSnapshot(username=normalized_username)
            self.db.add(snapshot)

        snapshot.user_data = user_data
        snapshot.stats_data = stats
        snapshot.version = self.version
        snapshot.cached_at = datetime.now(UTC)
        self.db.commit()

    def clear(self) -> int:
        result = self.db.execute(delete(CachedSnapshot))
        self.db.commit()
        return result.rowcount or 0
