from fastapi import APIRouter
from fastapi import BackgroundTasks
from fastapi import Depends
from fastapi import HTTPException
from fastapi import Query
from fastapi import Security
from fastapi.responses import PlainTextResponse
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from gitfetch.cache import SnapshotCache
from gitfetch.core.security import bearer_scheme
from gitfetch.core.security import resolve_github_token
from gitfetch.db import get_db
from gitfetch.display.layout import TerminalSize
from gitfetch.display.patterns import InvalidPatternError
from gitfetch.display.patterns import render_pattern
from gitfetch.display.patterns import shape_to_grid
from gitfetch.display.patterns import text_to_grid
from gitfetch.display.schemas import VisualOptions
from gitfetch.github_api import UserNotFoundError
from gitfetch.services.summary_service import GitHubAPIError
from gitfetch.services.summary_service import InvalidGitHubTokenError
from gitfetch.services.summary_service import load_snapshot
from gitfetch.services.summary_service import render_summary
from gitfetch.settings import Settings


router = APIRouter()


def get_settings() -> Settings:
    return Settings()


def as_terminal_text(lines: list[str]) -> PlainTextResponse:
    """Frame rendered lines with one blank line above and below."""

    return PlainTextResponse("\n".join(["", *lines, ""]) + "\n")


@router.get("/")
async def root() -> dict[str, str]:
    """Return a basic service greeting."""

    return {"message": "gitfetch"}


@router.get("/health/live")
def health_live() -> dict[str, str]:
    """Return liveness probe response for health checks."""

    return {"status": "ok"}


@router.get("/summary/{username}", response_class=PlainTextResponse)
def get_summary(
    username: str,
    background: BackgroundTasks,
    columns: int | None = Query(default=None, ge=1),
    rows: int | None = Query(default=None, ge=1),
    graph_only: bool = False,
    spaced: bool = True,
    width: int | None = Query(default=None, ge=1),
    height: int | None = Query(default=None, ge=1),
    no_date: bool = False,
    no_achievements: bool = False,
    no_languages: bool = False,
    no_issues: bool = False,
    no_pr: bool = False,
    no_account: bool = False,
    no_grid: bool = False,
    graph_timeline: bool = False,
    timeline: str | None = Query(default=None, max_length=8000),
    custom_box: str | None = Query(default=None, min_length=1, max_length=4),
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> PlainTextResponse:
    """Render the activity summary of `username` for the caller's terminal size."""

    token = resolve_github_token(credentials, settings.github_token)
    options = VisualOptions(
        graph_only=graph_only,
        spaced=spaced,
        width=width,
        height=height,
        no_date=no_date,
        no_achievements=no_achievements,
        no_languages=no_languages,
        no_issues=no_issues,
        no_pr=no_pr,
        no_account=no_account,
        no_grid=no_grid,
        graph_timeline=graph_timeline,
        custom_box=custom_box or settings.custom_box,
        palette=settings.palette,
    )
    terminal = TerminalSize(
        columns=columns or settings.terminal_columns,
        rows=rows or settings.terminal_rows,
    )

    try:
        user_data, stats = load_snapshot(
            username.lower(), db, settings, token, background
        )
    except UserNotFoundError as exc:
        raise HTTPException(status_code=404, detail="GitHub user not found") from exc
    except InvalidGitHubTokenError as exc:
        raise HTTPException(status_code=401, detail="GitHub token is invalid") from exc
    except GitHubAPIError as exc:
        raise HTTPException(
            status_code=502, detail="GitHub API request failed"
        ) from exc

    lines = render_summary(user_data, stats, options, terminal, timeline)
    return as_terminal_text(lines)


@router.get("/simulate", response_class=PlainTextResponse)
def simulate(
    text: str | None = None,
    shape: list[str] = Query(default=[]),
    spaced: bool = True,
    custom_box: str | None = Query(default=None, min_length=1, max_length=4),
    settings: Settings = Depends(get_settings),
) -> PlainTextResponse:
    """Draw text or predefined shapes as a contribution grid."""

    if (text is None) == (not shape):
        raise HTTPException(
            status_code=400, detail="exactly one of text or shape is required"
        )

    try:
        matrix = text_to_grid(text) if text is not None else shape_to_grid(shape)
    except InvalidPatternError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    options = VisualOptions(
        spaced=spaced,
        custom_box=custom_box or settings.custom_box,
        palette=settings.palette,
    )
    return as_terminal_text(render_pattern(matrix, options))


@router.delete("/cache")
def clear_cache(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> dict[str, int]:
    """Drop every cached snapshot."""

    cache = SnapshotCache(db, settings.cache_ttl_minutes, settings.cache_version)
    return {"cleared": cache.clear()}
