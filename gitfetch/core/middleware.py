from collections import defaultdict
from collections import deque
from collections.abc import Awaitable
from collections.abc import Callable
from threading import RLock
from time import monotonic

from fastapi import Request
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response


class SummaryRateLimitMiddleware(BaseHTTPMiddleware):
    """In-memory sliding-window rate limiter for summary rendering.

    Only GET requests under `path_prefix` count; each one may hit GitHub.
    """

    def __init__(
        self,
        app,
        requests_per_window: int = 30,
        window_seconds: int = 60,
        path_prefix: str = "/summary/",
    ) -> None:
        super().__init__(app)
        self.max_requests = max(1, requests_per_window)
        self.window_seconds = max(1, window_seconds)
        self.path_prefix = path_prefix
        self._ip_buckets: dict[str, deque[float]] = defaultdict(deque)
        self._lock = RLock()

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.method != "GET" or not request.url.path.startswith(
            self.path_prefix
        ):
            return await call_next(request)

        retry_after = self._register(self._client_ip(request), monotonic())
        if retry_after is not None:
            # Plain text so terminal clients print something readable.
            return PlainTextResponse(
                "Too Many Requests\n",
                status_code=429,
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)

    def _register(self, client: str, now: float) -> int | None:
        """Record one request; return seconds to wait when over the limit."""

        with self._lock:
            bucket = self._ip_buckets[client]
            cutoff = now - self.window_seconds
            while bucket and bucket[0] <= cutoff:
                bucket.popleft()

            if len(bucket) >= self.max_requests:
                return max(1, int(self.window_seconds - (now - bucket[0])))

            bucket.append(now)
            return None

    @staticmethod
    def _client_ip(request: Request) -> str:
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip() or "unknown"

        if request.client and request.client.host:
            return request.client.host

        return "unknown"
