from fastapi import FastAPI

from gitfetch.api.routes.summary import router
from gitfetch.core.middleware import SummaryRateLimitMiddleware
from gitfetch.core.observability import configure_logging
from gitfetch.core.observability import init_sentry
from gitfetch.db import init_db
from gitfetch.settings import Settings


def create_app() -> FastAPI:
    """Build the application with logging, Sentry, rate limiting and the cache table."""

    settings = Settings()
    configure_logging(settings)
    init_sentry(settings)
    init_db()

    app = FastAPI(title="gitfetch")
    app.add_middleware(
        SummaryRateLimitMiddleware,
        requests_per_window=settings.rate_limit_per_minute,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.include_router(router)
    return app


app = create_app()
