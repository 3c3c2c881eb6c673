"""FastAPI entrypoint for the Amma Food Center storefront."""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from storefront.api.deps import build_data_service
from storefront.api.v1.api import api_router
from storefront.core.config import settings
from storefront.services.auth_service import build_auth_gate
from storefront.storage.local_cache import StorageQuotaExceededError

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    same_site="lax",
    https_only=False,
    max_age=60 * 60 * settings.admin_session_hours,
)
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
def startup() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not os.getenv("SESSION_SECRET"):
        logger.warning("SESSION_SECRET not set; using development fallback secret.")
    app.state.data_service = build_data_service()
    app.state.auth_gate = build_auth_gate()
    logger.info(
        "[BOOTSTRAP] data mode: %s, auth mode: %s",
        "remote" if app.state.data_service.remote_enabled else "local",
        "remote" if app.state.auth_gate.remote_enabled else "demo",
    )


@app.exception_handler(StorageQuotaExceededError)
def storage_quota_exceeded(request: Request, exc: StorageQuotaExceededError) -> JSONResponse:
    logger.error("Local cache quota exceeded on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=507,
        content={"detail": "Local storage is full. Reset local data with POST /api/v1/admin/reset and retry."},
    )


@app.get("/")
def root() -> dict[str, str]:
    return {"message": f"{settings.store_name} API is running"}
