import asyncio
import logging
import os
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from assethub.auth.service import evict_token_cache, provider_configured
from assethub.config import config
from assethub.db.engine import get_engine, init_engine
from assethub.db.models import Base
from assethub.logs import configure_logging
from assethub.models.errors import ErrorEnvelope
from assethub.ratelimit import RateLimitMiddleware, evict_stale

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///assethub.db"

_CLEANUP_INTERVAL = 3600.0


def error_response(status_code: int, code: str, message: str, **extra) -> JSONResponse:
    """JSON error envelope: ``{"success": false, "error": {code, message, ...}}``."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": {"code": code, "message": message, **extra}},
    )


async def _periodic_cleanup() -> None:
    """Hourly eviction of idle rate-limit buckets and expired token-cache entries."""
    jobs = (("rate limiter", evict_stale), ("token cache", evict_token_cache))
    while True:
        await asyncio.sleep(_CLEANUP_INTERVAL)
        for label, job in jobs:
            try:
                job()
            except Exception:
                logger.error("Periodic cleanup of %s failed", label, exc_info=True)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    configure_logging()

    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if not provider_configured():
        logger.warning("Auth provider not configured; set ASSETHUB_AUTH_PROVIDER_URL and ASSETHUB_AUTH_SERVICE_KEY")
    if not (config.assets.unsplash_access_key or config.assets.pexels_api_key):
        logger.info("No Unsplash or Pexels key configured; searching free sources only")

    cleanup = asyncio.create_task(_periodic_cleanup())
    try:
        yield
    finally:
        cleanup.cancel()
        try:
            await cleanup
        except asyncio.CancelledError:
            pass
        await engine.dispose()


# --- Health and readiness ---
health_router = APIRouter(tags=["health"])


@health_router.get("/health")
async def health():
    return {"status": "ok"}


@health_router.get("/ready")
async def ready():
    """503 unless the database answers a trivial query."""
    try:
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception:
        logger.warning("Readiness check failed", exc_info=True)
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ok"}


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject write requests whose declared Content-Length exceeds ``limits.max_request_body``."""

    async def dispatch(self, request, call_next):
        if request.method in ("POST", "PUT", "PATCH"):
            limit = config.limits.max_request_body
            try:
                length = int(request.headers.get("content-length", 0))
            except ValueError:
                length = 0
            if length > limit:
                return error_response(413, "PAYLOAD_TOO_LARGE", f"Request body exceeds maximum of {limit} bytes.")
        return await call_next(request)


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        detail = exc.detail
        if isinstance(detail, dict) and "error" in detail:
            content = {"success": False, **detail}
        else:
            content = {"success": False, "error": {"code": "HTTP_ERROR", "message": str(detail)}}
        return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        details = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
            for err in exc.errors()
        ]
        return error_response(400, "VALIDATION_ERROR", "Invalid parameters", details=details)

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return error_response(500, "INTERNAL_ERROR", "Internal server error")


def create_app(database_url: str | None = None) -> FastAPI:
    init_engine(database_url or os.environ.get("ASSETHUB_DATABASE_URL", DEFAULT_DATABASE_URL))

    app = FastAPI(
        title=config.server.name,
        version="1.0.0",
        description="Stock image and icon search API",
        lifespan=_lifespan,
        responses={status: {"model": ErrorEnvelope} for status in (400, 401, 429, 500)},
    )
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(BodySizeLimitMiddleware)
    _install_error_handlers(app)

    from assethub.api.assets import router as assets_router
    from assethub.api.auth import router as auth_router
    from assethub.api.users import router as users_router

    for router in (health_router, assets_router, auth_router, users_router):
        app.include_router(router)

    return app
