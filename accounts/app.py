"""Application factory for the accounts API."""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from accounts.core.config import Settings, get_settings
from accounts.core.observability import configure_logging
from accounts.core.rate_limiter import RateLimiter
from accounts.core.security import Argon2PasswordHasher, PasswordHasher
from accounts.core.tokens import JwtTokenIssuer, TokenIssuer
from accounts.db.create_tables import create_all
from accounts.repositories.sql_repository import SQLRepository
from accounts.routers import auth as auth_router
from accounts.routers import categories as categories_router
from accounts.routers import users as users_router
from accounts.routers.error_handlers import SECURITY_HEADERS, register_error_handlers
from accounts.services.category_service import CategoryService
from accounts.services.user_service import UserService


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers for a JSON-only API."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def create_app(
    settings: Optional[Settings] = None,
    *,
    hasher: Optional[PasswordHasher] = None,
    token_issuer: Optional[TokenIssuer] = None,
) -> FastAPI:
    """Build the API. Compatible with ``uvicorn --factory accounts.app:create_app``."""
    settings = settings or get_settings()
    configure_logging(settings)
    create_all(settings.database_url)

    app = FastAPI(title="Accounts API")
    repository = SQLRepository(settings.database_url)
    app.state.settings = settings
    app.state.user_service = UserService(
        repository=repository,
        hasher=hasher or Argon2PasswordHasher(),
        tokens=token_issuer or JwtTokenIssuer(settings.token_secret, ttl_seconds=settings.token_ttl_seconds),
    )
    app.state.category_service = CategoryService(repository=repository)
    app.state.rate_limiter = RateLimiter(settings.auth_rate_limit, settings.auth_rate_window_seconds)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(settings.cors_origins),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
            expose_headers=["Authorization"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")
    register_error_handlers(app)

    app.include_router(auth_router.router)
    app.include_router(users_router.router)
    app.include_router(categories_router.router)

    @app.get("/health")
    def health():
        return {"ok": True}

    logger.info("Accounts API ready (env={})", settings.app_env)
    return app
