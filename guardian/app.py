"""FastAPI application factory for the Guardian backend."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from guardian.core.config import DEFAULT_JWT_SECRET, Settings, get_settings
from guardian.core.errors import ConfigurationError, GuardianError, InternalError
from guardian.core.logging_config import configure_logging
from guardian.db.session import create_all
from guardian.domain.validation import validation_error
from guardian.routers import agent as agent_router
from guardian.routers import auth as auth_router
from guardian.routers import users as users_router
from guardian.services.agent_service import AgentService
from guardian.services.auth_service import AuthService
from guardian.services.user_service import UserService

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Baseline headers for a JSON-only API."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Cache-Control", "no-store")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


async def _guardian_error_handler(request: Request, exc: GuardianError) -> JSONResponse:
    if isinstance(exc, InternalError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(exc.to_payload(), status_code=exc.status_code)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    err = validation_error(exc.errors())
    return JSONResponse(err.to_payload(), status_code=err.status_code)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"error": InternalError.default_message}, status_code=500)


def _check_settings(settings: Settings) -> None:
    if settings.jwt_secret == DEFAULT_JWT_SECRET:
        if settings.app_env == "prod":
            raise ConfigurationError("JWT_SECRET must be set when APP_ENV=prod.")
        logger.warning("JWT_SECRET is not set; tokens are signed with the development secret.")
    if not settings.ip_allowlist_enabled:
        logger.warning("AUTHORIZED_CLIENT_IPS is empty; /agent/execute accepts any client IP.")
    if not (settings.mobilerun_api_key and settings.mobilerun_device_id):
        logger.info("No process-wide Mobilerun credentials; users must store their own.")


@asynccontextmanager
async def _lifespan(app: FastAPI):
    create_all()
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build a fully wired app; compatible with ``uvicorn --factory``."""
    settings = settings or get_settings()
    configure_logging(settings)
    _check_settings(settings)

    app = FastAPI(title="Guardian Agent API", lifespan=_lifespan)
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")
    app.add_exception_handler(GuardianError, _guardian_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    app.state.settings = settings
    app.state.auth_service = AuthService()
    app.state.user_service = UserService()
    app.state.agent_service = AgentService(settings=settings)

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    app.include_router(auth_router.router)
    app.include_router(users_router.router)
    app.include_router(agent_router.router)
    return app
