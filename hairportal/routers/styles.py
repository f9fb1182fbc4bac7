from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response, status

from hairportal.core.rate_limiter import limit_writes
from hairportal.routers import get_service
from hairportal.services.style_service import StyleService

router = APIRouter(prefix="/api/styles", tags=["styles"])


def _styles(request: Request) -> StyleService:
    return get_service(request, "style_service")


@router.get("")
def list_styles(request: Request):
    return _styles(request).list()


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(limit_writes)])
def create_style(request: Request, payload: Any = Body(None)):
    return _styles(request).create(payload)


@router.put("/{style_id}", dependencies=[Depends(limit_writes)])
def update_style(style_id: str, request: Request, payload: Any = Body(None)):
    return _styles(request).update(style_id, payload)


@router.delete("/{style_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(limit_writes)])
def delete_style(style_id: str, request: Request):
    _styles(request).delete(style_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
