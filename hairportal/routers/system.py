from __future__ import annotations

import os
import platform
import socket

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from hairportal.core.config import get_settings

router = APIRouter(tags=["system"])


@router.get("/health", response_class=PlainTextResponse)
def health():
    return PlainTextResponse("OK")


@router.get("/info")
def info(request: Request):
    settings = getattr(request.app.state, "settings", None) or get_settings()
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "python": platform.python_version(),
        "hostname": socket.gethostname(),
        "cwd": os.getcwd(),
        "dataDir": str(settings.data_dir),
        "storage": settings.storage_backend,
    }
