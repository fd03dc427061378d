from __future__ import annotations

from fastapi import Request

from accounts.services.category_service import CategoryService
from accounts.services.user_service import UserService


def get_user_service(request: Request) -> UserService:
    svc = getattr(getattr(request.app, "state", None), "user_service", None)
    if not svc:
        raise RuntimeError("UserService not configured")
    return svc


def get_category_service(request: Request) -> CategoryService:
    svc = getattr(getattr(request.app, "state", None), "category_service", None)
    if not svc:
        raise RuntimeError("CategoryService not configured")
    return svc


def rate_limited(scope: str):
    """Dependency factory counting one hit per request against ``scope``."""

    def _check(request: Request) -> None:
        limiter = getattr(request.app.state, "rate_limiter", None)
        if limiter is not None:
            limiter.hit(request, scope)

    return _check
