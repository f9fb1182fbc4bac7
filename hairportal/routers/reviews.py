from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status

from hairportal.core.rate_limiter import limit_writes
from hairportal.routers import get_service
from hairportal.services.review_service import ReviewService

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


def _reviews(request: Request) -> ReviewService:
    return get_service(request, "review_service")


@router.get("")
def list_reviews(request: Request):
    return _reviews(request).list()


@router.get("/stats")
def review_stats(request: Request):
    return _reviews(request).stats()


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(limit_writes)])
def create_review(request: Request, payload: Any = Body(None)):
    return _reviews(request).create(payload)
