"""Per-client-IP fixed-window rate limiting middleware.

Counts requests per client address within a fixed window and answers
429 once the limit is exceeded. State lives on the middleware instance,
so each application has its own counters.
"""

import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


@dataclass
class _Window:
    count: int
    reset_at: float


def client_key(request: Request) -> str:
    """Identify the caller: edge-proxy header, then forwarded-for, then peer."""
    forwarded = request.headers.get("cf-connecting-ip") or request.headers.get(
        "x-forwarded-for"
    )
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Fixed-window limiter.

    Attributes:
        max_requests: Requests allowed per window (0 or less disables limiting)
        window_seconds: Window length in seconds
        exempt_paths: Paths never counted
    """

    def __init__(
        self,
        app,
        max_requests: int = 100,
        window_seconds: int = 15 * 60,
        exempt_paths: Iterable[str] = ("/health",),
    ):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.exempt_paths = frozenset(exempt_paths)
        self._windows: Dict[str, _Window] = {}
        self._lock = threading.Lock()

    def _hit(self, key: str, now: float) -> _Window:
        with self._lock:
            for stale in [k for k, w in self._windows.items() if w.reset_at <= now]:
                del self._windows[stale]

            window = self._windows.get(key)
            if window is None:
                window = _Window(count=0, reset_at=now + self.window_seconds)
                self._windows[key] = window
            window.count += 1
            return _Window(count=window.count, reset_at=window.reset_at)

    async def dispatch(self, request: Request, call_next):
        if (
            self.max_requests <= 0
            or request.method == "OPTIONS"
            or request.url.path in self.exempt_paths
        ):
            return await call_next(request)

        key = client_key(request)
        window = self._hit(key, time.time())
        headers = {
            "X-RateLimit-Limit": str(self.max_requests),
            "X-RateLimit-Remaining": str(max(0, self.max_requests - window.count)),
            "X-RateLimit-Reset": datetime.fromtimestamp(
                window.reset_at, tz=timezone.utc
            ).isoformat(),
        }

        if window.count > self.max_requests:
            logger.warning(f"Rate limit exceeded for {key} on {request.url.path}")
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"error": RATE_LIMIT_MESSAGE},
                headers=headers,
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response
