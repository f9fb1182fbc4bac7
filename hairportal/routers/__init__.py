"""
FastAPI routers grouped by domain (styles, reviews, booking, etc.).

Each module exposes an APIRouter that the app factory includes. Services are
looked up on ``request.app.state`` so tests can swap them for instances wired
to temporary stores.
"""

from __future__ import annotations

from fastapi import Request


def get_service(request: Request, name: str):
    svc = getattr(getattr(request.app, "state", None), name, None)
    if svc is None:
        raise RuntimeError(f"{name} is not configured")
    return svc
