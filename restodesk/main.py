"""FastAPI entrypoint for the restaurant front-of-house service."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from restodesk.api.v1.api import api_router
from restodesk.core.config import settings
from restodesk.db import session as db_session
from restodesk.db.base import Base
from restodesk.db.seed import ensure_admin_user
from restodesk.services.availability_service import register_availability_listener, unregister_availability_listener
from restodesk.services.errors import RestodeskError
from restodesk.services.live_cache import collection_cache

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)
app.include_router(api_router, prefix="/api/v1")


@app.exception_handler(RestodeskError)
async def handle_domain_error(request: Request, exc: RestodeskError) -> JSONResponse:
    logger.info("[API] %s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.on_event("startup")
def startup() -> None:
    if settings.jwt_secret_key.startswith("dev-only"):
        logger.warning("JWT_SECRET_KEY not set; using development fallback secret.")
    Base.metadata.create_all(bind=db_session.engine)
    collection_cache.clear()
    register_availability_listener()
    with db_session.SessionLocal() as session:
        try:
            created = ensure_admin_user(session)
            logger.info("[BOOTSTRAP] default admin created: %s", "yes" if created else "no")
        except Exception:
            logger.exception("[BOOTSTRAP] Seed/bootstrap failed; continuing startup.")


@app.on_event("shutdown")
def shutdown() -> None:
    unregister_availability_listener()


@app.get("/")
def root() -> dict[str, str]:
    return {"name": settings.app_name, "status": "ok"}
