"""
BrandOps — FastAPI Backend
Multi-brand operations dashboard: revenue, ad spend, AI agents, ad performance and ops tasks.
Data lives in whichever Storage backend STORAGE_BACKEND selects (memory, database, supabase).
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from brandops.auth import require_auth
from brandops.config import Settings, get_settings
from brandops.routers import (
    auth, users, brands, revenue, ad_spend, ai_agents, ad_performance, ops_tasks, insights,
)
from brandops.schemas import UserCreate
from brandops.services.insights_service import InsightsService, create_insights_service
from brandops.storage.base import Storage
from brandops.storage.errors import ConstraintViolationError, InvalidReferenceError, StorageError
from brandops.storage.factory import build_storage
from brandops.utils import safe_error_detail

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SERVICE_NAME = "BrandOps Dashboard"


async def _bootstrap_first_admin(storage: Storage, settings: Settings):
    """Create the admin named by FIRST_ADMIN_USERNAME / FIRST_ADMIN_PASSWORD if it does not exist yet."""
    if not settings.first_admin_username or not settings.first_admin_password:
        return
    if await storage.get_user_by_username(settings.first_admin_username):
        return
    admin = await storage.create_user(UserCreate(
        username=settings.first_admin_username,
        password=settings.first_admin_password,
        name="Admin",
        role="admin",
    ))
    logger.info(f"Bootstrap: created first admin user {admin.username}")


def create_app(
    storage: Optional[Storage] = None,
    settings: Optional[Settings] = None,
    insights_service: Optional[InsightsService] = None,
) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {SERVICE_NAME}...")
        if getattr(app.state, "storage", None) is None:
            app.state.storage = build_storage(settings)
        try:
            await app.state.storage.startup()
            await _bootstrap_first_admin(app.state.storage, settings)
            logger.info(f"Storage ready ({app.state.storage.name}).")
        except Exception as e:
            logger.error(f"Startup failed (storage/init): {e}", exc_info=True)
            # Still yield so app can serve /api/health (degraded) and logs are visible
        yield
        logger.info("Shutting down...")
        await app.state.storage.close()

    app = FastAPI(
        title=SERVICE_NAME,
        description="Operations dashboard API for multiple brands",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.storage = storage
    app.state.insights = insights_service or create_insights_service(settings.openai_api_key, settings.openai_model)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.secret_key,
        session_cookie="brandops_session",
        max_age=settings.session_max_age,
        same_site="lax",
        https_only=settings.is_production,
    )

    # ── Error mapping ─────────────────────────────────────────────────
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"detail": "Invalid request", "errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(InvalidReferenceError)
    async def invalid_reference_handler(request: Request, exc: InvalidReferenceError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ConstraintViolationError)
    async def constraint_violation_handler(request: Request, exc: ConstraintViolationError):
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        return JSONResponse(status_code=500, content={"detail": safe_error_detail(exc)})

    # ── Auth (login/logout/me public; users requires an admin session) ─
    app.include_router(auth.router, prefix="/api")
    app.include_router(users.router, prefix="/api")

    # ── Data routers (login enforced only when REQUIRE_LOGIN is set) ──
    _auth = [Depends(require_auth)]
    for module in (brands, revenue, ad_spend, ai_agents, ad_performance, ops_tasks, insights):
        app.include_router(module.router, prefix="/api", dependencies=_auth)

    @app.get("/api/health")
    async def health_check(request: Request):
        backend: Storage = request.app.state.storage
        ok = backend is not None and await backend.ping()
        return {
            "status": "healthy" if ok else "degraded",
            "service": SERVICE_NAME,
            "storage": backend.name if backend is not None else "unconfigured",
        }

    return app


app = create_app()
