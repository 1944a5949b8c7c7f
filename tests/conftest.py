import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from collections.abc import Callable
from collections.abc import Generator
from datetime import date
from datetime import timedelta
from typing import Any

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import gitfetch.models  # noqa: F401
from gitfetch.db import Base

CalendarFactory = Callable[[date, list[int]], list[dict[str, Any]]]


@pytest.fixture
def session_factory() -> Generator[sessionmaker[Session], None, None]:
    test_engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)

    yield sessionmaker(bind=test_engine, autoflush=False, autocommit=False)

    test_engine.dispose()


@pytest.fixture
def db_session(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def make_calendar() -> CalendarFactory:
    """Build GitHub-style calendar weeks from a start date and daily counts."""

    def build(start: date, counts: list[int]) -> list[dict[str, Any]]:
        weeks: list[dict[str, Any]] = []
        for offset in range(0, len(counts), 7):
            weeks.append(
                {
                    "contributionDays": [
                        {
                            "contributionCount": count,
                            "date": (start + timedelta(days=offset + idx)).isoformat(),
                        }
                        for idx, count in enumerate(counts[offset : offset + 7])
                    ]
                }
            )
        return weeks

    return build


@pytest.fixture
def user_data() -> dict[str, Any]:
    return {
        "login": "octocat",
        "name": "Octo Cat",
        "bio": "Builds things",
        "company": "GitHub",
        "blog": "https://github.blog",
    }


@pytest.fixture
def stats(make_calendar: CalendarFactory) -> dict[str, Any]:
    bucket = {
        "total_count": 1,
        "items": [{"title": "Fix the widget renderer", "repo": "octocat/hello"}],
    }
    return {
        "total_stars": 42,
        "languages": {"Python": 45.0, "Rust": 30.0, "Go": 25.0},
        # 53 full weeks starting on a Sunday, every day active.
        "contribution_graph": make_calendar(
            date(2025, 10, 19), [(idx % 4) + 1 for idx in range(53 * 7)]
        ),
        "pull_requests": {
            "awaiting_review": bucket,
            "open": bucket,
            "mentions": bucket,
        },
        "issues": {"assigned": bucket, "created": bucket, "mentions": bucket},
    }
