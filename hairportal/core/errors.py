"""Error hierarchy shared by services and the HTTP layer."""
from __future__ import annotations

from typing import Any, Optional


class PortalError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 400
    code = "invalid"

    def __init__(self, message: str, *, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> dict:
        payload: dict = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(PortalError):
    """Missing or malformed input."""

    status_code = 400
    code = "validation"


class NotFoundError(PortalError):
    status_code = 404
    code = "not_found"

    def __init__(self, message: str = "not found", **kwargs):
        super().__init__(message, **kwargs)


class SpamRejected(PortalError):
    """Anti-abuse heuristic triggered on a public form."""

    status_code = 400
    code = "spam"


class UpstreamError(PortalError):
    """A third-party dependency failed or answered with an error."""

    status_code = 502
    code = "upstream"

    def __init__(self, message: str = "inspiration_unavailable", **kwargs):
        super().__init__(message, **kwargs)


class RateLimited(PortalError):
    status_code = 429
    code = "rate_limited"

    def __init__(self, message: str = "too_many_requests", **kwargs):
        super().__init__(message, **kwargs)


class InternalError(PortalError):
    """Unexpected fault; the message never carries the underlying exception text."""

    status_code = 500
    code = "internal"

    def __init__(self, message: str = "internal_error", **kwargs):
        super().__init__(message, **kwargs)
