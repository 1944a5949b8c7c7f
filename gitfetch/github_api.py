import logging
from collections.abc import Mapping
from typing import Any

import httpx

logger = logging.getLogger(__name__)

USER_AGENT = "gitfetch"
SEARCH_ITEMS = 3

CALENDAR_QUERY = """
query($login: String!) {
  user(login: $login) {
    contributionsCollection {
      contributionCalendar {
        weeks {
          contributionDays {
            date
            contributionCount
          }
        }
      }
    }
  }
}
"""

PULL_REQUEST_QUERIES = {
    "awaiting_review": "is:pr is:open review-requested:{username}",
    "open": "is:pr is:open author:{username}",
    "mentions": "is:pr is:open mentions:{username}",
}

ISSUE_QUERIES = {
    "assigned": "is:issue is:open assignee:{username}",
    "created": "is:issue is:open author:{username}",
    "mentions": "is:issue is:open mentions:{username}",
}


class UserNotFoundError(Exception):
    """Raised when the provider has no user with the requested name."""


def _headers(token: str | None) -> dict[str, str]:
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": USER_AGENT,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def fetch_user(username: str, token: str | None, api_base_url: str) -> dict[str, Any]:
    """Fetch public profile fields for `username` from GitHub REST API."""

    response = httpx.get(
        f"{api_base_url}/users/{username}",
        headers=_headers(token),
        timeout=15.0,
    )
    if response.status_code == 404:
        raise UserNotFoundError(username)
    response.raise_for_status()

    payload: Any = response.json()
    if not isinstance(payload, Mapping):
        raise ValueError("GitHub user response is invalid")

    raw_login = payload.get("login")
    if not isinstance(raw_login, str) or not raw_login:
        raise ValueError("GitHub user response is missing required fields")

    fields = (
        "name",
        "bio",
        "company",
        "blog",
        "location",
        "public_repos",
        "followers",
        "following",
        "created_at",
    )
    return {"login": raw_login, **{field: payload.get(field) for field in fields}}


def fetch_repositories(
    username: str, token: str | None, api_base_url: str
) -> list[Mapping[str, Any]]:
    """Fetch up to 100 repositories owned by `username`."""

    response = httpx.get(
        f"{api_base_url}/users/{username}/repos",
        params={"per_page": 100, "type": "owner"},
        headers=_headers(token),
        timeout=20.0,
    )
    response.raise_for_status()

    payload: Any = response.json()
    if not isinstance(payload, list):
        raise ValueError("GitHub repositories response is invalid")
    return [repo for repo in payload if isinstance(repo, Mapping)]


def summarize_repositories(
    repos: list[Mapping[str, Any]],
) -> tuple[int, dict[str, float]]:
    """Return total stars and the percentage of repos per primary language."""

    total_stars = 0
    language_counts: dict[str, int] = {}
    for repo in repos:
        stars = repo.get("stargazers_count")
        if isinstance(stars, int):
            total_stars += stars
        language = repo.get("language")
        if isinstance(language, str) and language:
            language_counts[language] = language_counts.get(language, 0) + 1

    counted = sum(language_counts.values())
    languages = {
        language: round(count * 100.0 / counted, 1)
        for language, count in language_counts.items()
    }
    return total_stars, languages


def fetch_contribution_weeks(
    username: str, token: str | None, graphql_url: str
) -> list[Any]:
    """Fetch the contribution calendar weeks for a user from GitHub GraphQL API."""

    if not token:
        logger.warning("No GitHub token configured; contribution calendar skipped")
        return []

    response = httpx.post(
        graphql_url,
        json={"query": CALENDAR_QUERY, "variables": {"login": username}},
        headers={**_headers(token), "Content-Type": "application/json"},
        timeout=20.0,
    )
    response.raise_for_status()

    payload = response.json()
    if not isinstance(payload, Mapping):
        raise ValueError("GitHub GraphQL response is invalid")

    if payload.get("errors"):
        raise ValueError("GitHub GraphQL returned errors")

    data = payload.get("data")
    user = data.get("user") if isinstance(data, Mapping) else None
    collection = (
        user.get("contributionsCollection") if isinstance(user, Mapping) else None
    )
    calendar = (
        collection.get("contributionCalendar")
        if isinstance(collection, Mapping)
        else None
    )
    weeks = calendar.get("weeks") if isinstance(calendar, Mapping) else None
    if not isinstance(weeks, list):
        raise ValueError("GitHub contribution weeks are missing")

    return weeks


def _repo_from_url(repository_url: Any) -> str:
    if not isinstance(repository_url, str):
        return ""
    parts = repository_url.rstrip("/").split("/")
    return "/".join(parts[-2:]) if len(parts) >= 2 else ""


def search_bucket(query: str, token: str | None, api_base_url: str) -> dict[str, Any]:
    """Run one issue search and keep its total and first few matches."""

    try:
        response = httpx.get(
            f"{api_base_url}/search/issues",
            params={"q": query, "per_page": SEARCH_ITEMS},
            headers=_headers(token),
            timeout=15.0,
        )
        response.raise_for_status()
        payload: Any = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("GitHub search %r failed: %s", query, exc)
        return {"total_count": 0, "items": []}

    if not isinstance(payload, Mapping):
        return {"total_count": 0, "items": []}

    items = []
    raw_items = payload.get("items")
    for item in raw_items if isinstance(raw_items, list) else []:
        if not isinstance(item, Mapping):
            continue
        items.append(
            {
                "title": item.get("title") or "",
                "repo": _repo_from_url(item.get("repository_url")),
            }
        )

    total_count = payload.get("total_count")
    return {
        "total_count": total_count if isinstance(total_count, int) else 0,
        "items": items[:SEARCH_ITEMS],
    }


def fetch_stats(
    username: str,
    user_data: Mapping[str, Any],
    token: str | None,
    api_base_url: str,
    graphql_url: str,
) -> dict[str, Any]:
    """Collect stars, languages, contribution calendar, PRs and issues."""

    login = user_data.get("login") or username
    total_stars, languages = summarize_repositories(
        fetch_repositories(login, token, api_base_url)
    )

    try:
        contribution_graph = fetch_contribution_weeks(login, token, graphql_url)
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Failed to fetch contribution graph for %s: %s", login, exc)
        contribution_graph = []

    def run_searches(queries: Mapping[str, str]) -> dict[str, Any]:
        return {
            key: search_bucket(query.format(username=login), token, api_base_url)
            for key, query in queries.items()
        }

    return {
        "total_stars": total_stars,
        "languages": languages,
        "contribution_graph": contribution_graph,
        "pull_requests": run_searches(PULL_REQUEST_QUERIES),
        "issues": run_searches(ISSUE_QUERIES),
    }
