import logging
from typing import Any

import httpx
import sentry_sdk
from fastapi import BackgroundTasks
from sqlalchemy.orm import Session

from gitfetch.cache import Snapshot
from gitfetch.cache import SnapshotCache
from gitfetch.db import SessionLocal
from gitfetch.display.layout import LayoutNegotiator
from gitfetch.display.layout import TerminalSize
from gitfetch.display.schemas import SummaryPayload
from gitfetch.display.schemas import VisualOptions
from gitfetch.github_api import UserNotFoundError
from gitfetch.github_api import fetch_stats
from gitfetch.github_api import fetch_user
from gitfetch.settings import Settings

logger = logging.getLogger(__name__)


class InvalidGitHubTokenError(Exception):
    """Raised when GitHub rejects the provided token."""


class GitHubAPIError(Exception):
    """Raised when GitHub requests fail for non-auth reasons."""


def fetch_snapshot(username: str, token: str | None, settings: Settings) -> Snapshot:
    """Fetch profile and statistics, translating transport errors."""

    try:
        user_data = fetch_user(username, token, settings.github_api_base_url)
        stats = fetch_stats(
            username,
            user_data,
            token,
            settings.github_api_base_url,
            settings.github_graphql_url,
        )
    except UserNotFoundError:
        raise
    except httpx.HTTPStatusError as exc:
        if exc.response.status_code in {401, 403}:
            raise InvalidGitHubTokenError from exc
        raise GitHubAPIError from exc
    except Exception as exc:
        raise GitHubAPIError from exc

    return user_data, stats


def refresh_snapshot(username: str, token: str | None, settings: Settings) -> None:
    """Re-fetch a user's snapshot after a stale one was served.

    Runs after the response was sent; failures are only logged.
    """

    db = SessionLocal()
    try:
        user_data, stats = fetch_snapshot(username, token, settings)
        cache = SnapshotCache(db, settings.cache_ttl_minutes, settings.cache_version)
        cache.put(username, user_data, stats)
        logger.info("Refreshed cached snapshot for %s", username)
    except Exception as exc:
        logger.warning("Background refresh for %s failed: %s", username, exc)
        sentry_sdk.capture_exception(exc)
    finally:
        db.close()


def load_snapshot(
    username: str,
    db: Session,
    settings: Settings,
    token: str | None,
    background: BackgroundTasks,
) -> Snapshot:
    """Serve from cache when possible, refreshing stale entries in the background."""

    cache = SnapshotCache(db, settings.cache_ttl_minutes, settings.cache_version)

    fresh = cache.get(username)
    if fresh is not None:
        return fresh

    stale = cache.get_stale(username)
    if stale is not None:
        logger.info("Serving stale snapshot for %s", username)
        background.add_task(refresh_snapshot, username, token, settings)
        return stale

    user_data, stats = fetch_snapshot(username, token, settings)
    cache.put(username, user_data, stats)
    return user_data, stats


def render_summary(
    user_data: dict[str, Any],
    stats: dict[str, Any],
    options: VisualOptions,
    terminal: TerminalSize,
    timeline: str | None = None,
) -> list[str]:
    payload = SummaryPayload.model_validate({**user_data, **stats})
    return LayoutNegotiator(payload, options, terminal, timeline).render()
