"""
FastAPI application for the salon marketing site.

``create_app`` wires settings, logging, middleware, error handlers, services
and routers.  The module-level ``app`` is what an ASGI server imports::

    uvicorn hairportal.app:app
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from hairportal.core.config import Settings, get_settings
from hairportal.core.errors import InternalError, PortalError
from hairportal.core.logging_config import setup_logging
from hairportal.core.middleware import RequestIdMiddleware, SecurityHeadersMiddleware
from hairportal.core.rate_limiter import ApiRateLimitMiddleware, RateLimiter
from hairportal.db.create_tables import create_all
from hairportal.routers import booking as booking_router
from hairportal.routers import inspiration as inspiration_router
from hairportal.routers import products as products_router
from hairportal.routers import reviews as reviews_router
from hairportal.routers import styles as styles_router
from hairportal.routers import system as system_router
from hairportal.services.booking_service import BookingService
from hairportal.services.inspiration_service import InspirationService
from hairportal.services.product_service import ProductService
from hairportal.services.review_service import ReviewService
from hairportal.services.style_service import StyleService

logger = logging.getLogger(__name__)

LOCAL_ORIGINS = {
    "http://localhost:3008",
    "http://127.0.0.1:3008",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
}


def _portal_error(_request: Request, exc: PortalError) -> JSONResponse:
    return JSONResponse(exc.to_payload(), status_code=exc.status_code)


def _http_error(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        message = "not_found"
    elif exc.status_code == 405:
        message = "method_not_allowed"
    else:
        message = str(exc.detail)
    return JSONResponse({"error": message}, status_code=exc.status_code, headers=getattr(exc, "headers", None))


def _request_validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(err.get("type") == "json_invalid" for err in errors):
        return JSONResponse({"error": "invalid_json"}, status_code=400)
    details = [
        {"field": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg", "")}
        for err in errors
    ]
    return JSONResponse({"error": "invalid_payload", "details": details}, status_code=400)


def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    err = InternalError()
    return JSONResponse(err.to_payload(), status_code=err.status_code)


def _allowed_origins(settings: Settings) -> list[str]:
    origins = {settings.public_base_url}
    if settings.app_env != "prod":
        origins.update(LOCAL_ORIGINS)
    return sorted(origin for origin in origins if origin)


def create_app(
    *,
    style_service: Optional[StyleService] = None,
    review_service: Optional[ReviewService] = None,
    product_service: Optional[ProductService] = None,
    booking_service: Optional[BookingService] = None,
    inspiration_service: Optional[InspirationService] = None,
) -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file or None)

    if settings.storage_backend == "sql":
        create_all()

    app = FastAPI(title="Hairstyle Portal API", version=settings.app_version)
    app.state.settings = settings
    app.state.style_service = style_service or StyleService()
    app.state.review_service = review_service or ReviewService()
    app.state.product_service = product_service or ProductService()
    app.state.booking_service = booking_service or BookingService()
    app.state.inspiration_service = inspiration_service or InspirationService()
    app.state.write_limiter = RateLimiter(settings.write_rate_limit, settings.write_rate_window_seconds)
    app.state.api_limiter = RateLimiter(settings.api_rate_limit, settings.api_rate_window_seconds)

    app.add_exception_handler(PortalError, _portal_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(Exception, _unexpected_error)

    origins = _allowed_origins(settings)
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(ApiRateLimitMiddleware, limiter=app.state.api_limiter)
    # Request id inside the security headers so a 500 built there still gets them.
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")

    app.include_router(system_router.router)
    app.include_router(styles_router.router)
    app.include_router(products_router.router)
    app.include_router(reviews_router.router)
    app.include_router(booking_router.router)
    app.include_router(inspiration_router.router)

    # Mounted last so the API routes above always win.
    if settings.public_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.public_dir, html=True), name="public")
    else:
        logger.info("Public directory %s not found; static site disabled", settings.public_dir)

    logger.info("%s %s ready (storage=%s, data=%s)", settings.app_name, settings.app_version,
                settings.storage_backend, settings.data_dir)
    return app


app = create_app()
