"""HTTP middleware: baseline security headers and request ids."""
from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from .errors import InternalError

logger = logging.getLogger("hairportal.http")

REQUEST_ID_HEADER = "X-Request-Id"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (CSP, anti clickjacking, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault(
            "Content-Security-Policy",
            "default-src 'self'; "
            "img-src 'self' data: https://images.unsplash.com https://picsum.photos https://fastly.picsum.photos; "
            "style-src 'self' 'unsafe-inline'; "
            "script-src 'self' https://app.salonized.com; "
            "frame-src https://app.salonized.com https://www.treatwell.com; "
            "connect-src 'self'",
        )
        response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Propagate (or mint) a request id and log one line per request."""

    async def dispatch(self, request, call_next):
        request_id = (request.headers.get(REQUEST_ID_HEADER) or "").strip() or str(uuid.uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s id=%s", request.method, request.url.path, request_id)
            err = InternalError()
            response = JSONResponse(err.to_payload(), status_code=err.status_code)
        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "%s %s -> %s (%.1f ms) id=%s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request_id,
        )
        return response
