from datetime import UTC
from datetime import datetime
from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session

from gitfetch.cache import SnapshotCache
from gitfetch.models import CachedSnapshot


def age_snapshot(db: Session, username: str, minutes: int) -> None:
    snapshot = db.scalar(
        select(CachedSnapshot).where(CachedSnapshot.username == username)
    )
    snapshot.cached_at = datetime.now(UTC) - timedelta(minutes=minutes)
    db.commit()


def test_put_then_get_normalizes_username(db_session: Session) -> None:
    cache = SnapshotCache(db_session, ttl_minutes=15, version="1")

    cache.put("OctoCat", {"login": "octocat"}, {"total_stars": 3})

    assert cache.get("octocat") == ({"login": "octocat"}, {"total_stars": 3})
    assert cache.get("OCTOCAT") is not None
    assert cache.get("someone") is None


def test_put_overwrites_existing_entry(db_session: Session) -> None:
    cache = SnapshotCache(db_session, ttl_minutes=15, version="1")

    cache.put("octocat", {"login": "octocat"}, {"total_stars": 3})
    cache.put("octocat", {"login": "octocat"}, {"total_stars": 4})

    assert cache.get("octocat")[1] == {"total_stars": 4}
    assert len(db_session.scalars(select(CachedSnapshot)).all()) == 1


def test_expired_entry_is_only_returned_as_stale(db_session: Session) -> None:
    cache = SnapshotCache(db_session, ttl_minutes=15, version="1")
    cache.put("octocat", {"login": "octocat"}, {})

    age_snapshot(db_session, "octocat", 30)

    assert cache.get("octocat") is None
    assert cache.get_stale("octocat") == ({"login": "octocat"}, {})


def test_other_version_is_invisible(db_session: Session) -> None:
    SnapshotCache(db_session, ttl_minutes=15, version="1").put("octocat", {}, {})

    newer = SnapshotCache(db_session, ttl_minutes=15, version="2")

    assert newer.get("octocat") is None
    assert newer.get_stale("octocat") is None


def test_clear_removes_everything(db_session: Session) -> None:
    cache = SnapshotCache(db_session, ttl_minutes=15, version="1")
    cache.put("octocat", {}, {})
    cache.put("hubot", {}, {})

    assert cache.clear() == 2
    assert cache.get_stale("octocat") is None
