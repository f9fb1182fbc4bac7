from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Dict, Tuple

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .errors import RateLimited

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitState:
    """Outcome of one hit, reported with the standard RateLimit-* headers."""

    limit: int
    remaining: int
    reset_after: int
    exceeded: bool

    def headers(self) -> dict:
        return {
            "RateLimit-Limit": str(self.limit),
            "RateLimit-Remaining": str(self.remaining),
            "RateLimit-Reset": str(self.reset_after),
        }


class RateLimiter:
    """Fixed-window hit counter keyed by an arbitrary string."""

    def __init__(self, limit: int, window_seconds: int) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._hits: Dict[str, Tuple[int, float]] = {}
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.limit > 0

    def hit(self, key: str) -> RateLimitState:
        if not self.enabled:
            return RateLimitState(0, 0, 0, False)
        now = time.time()
        with self._lock:
            count, reset = self._hits.get(key, (0, now + self.window_seconds))
            if now > reset:
                count = 0
                reset = now + self.window_seconds
            count += 1
            self._hits[key] = (count, reset)
        return RateLimitState(
            limit=self.limit,
            remaining=max(0, self.limit - count),
            reset_after=max(0, math.ceil(reset - now)),
            exceeded=count > self.limit,
        )

    def check(self, key: str) -> RateLimitState:
        state = self.hit(key)
        if state.exceeded:
            logger.warning("Rate limit exceeded for %s", key)
            raise RateLimited()
        return state


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def limit_writes(request: Request) -> None:
    """FastAPI dependency guarding mutating API routes."""
    limiter = getattr(getattr(request.app, "state", None), "write_limiter", None)
    if limiter is None:
        return
    limiter.check(f"write:{client_ip(request)}")


class ApiRateLimitMiddleware(BaseHTTPMiddleware):
    """General limiter for everything under /api; reports its state on each response."""

    def __init__(self, app, *, limiter: RateLimiter, prefix: str = "/api") -> None:
        super().__init__(app)
        self._limiter = limiter
        self._prefix = prefix

    async def dispatch(self, request, call_next):
        path = request.url.path
        if not self._limiter.enabled or not (path == self._prefix or path.startswith(self._prefix + "/")):
            return await call_next(request)
        key = f"api:{client_ip(request)}"
        state = self._limiter.hit(key)
        if state.exceeded:
            logger.warning("Rate limit exceeded for %s", key)
            err = RateLimited()
            return JSONResponse(err.to_payload(), status_code=err.status_code, headers=state.headers())
        response = await call_next(request)
        for name, value in state.headers().items():
            response.headers[name] = value
        return response
