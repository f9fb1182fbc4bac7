from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from hairportal.core.rate_limiter import limit_writes
from hairportal.routers import get_service
from hairportal.services.booking_service import BookingService

router = APIRouter(prefix="/api/booking", tags=["booking"])


def _booking(request: Request) -> BookingService:
    return get_service(request, "booking_service")


@router.get("/config")
def get_booking_config(request: Request):
    return _booking(request).get_config().to_dict()


@router.post("/config", dependencies=[Depends(limit_writes)])
def set_booking_config(request: Request, payload: Any = Body(None)):
    return _booking(request).set_config(payload).to_dict()


@router.post("/initiate")
def initiate_booking(request: Request, payload: Any = Body(None)):
    # Always 200: an unusable configuration degrades to the contact fallback.
    return _booking(request).initiate(payload)
