from fastapi import APIRouter, Request

from hairportal.routers import get_service

router = APIRouter(prefix="/api/inspiration", tags=["inspiration"])


@router.get("")
def inspiration(request: Request):
    return get_service(request, "inspiration_service").search()
