from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from accounts.core.tokens import bearer_header
from accounts.domain.users import public_user
from accounts.routers.deps import get_user_service, rate_limited
from accounts.services.user_service import UserService

router = APIRouter(tags=["auth"])


@router.post("/login", dependencies=[Depends(rate_limited("auth:login"))])
def login(payload: Optional[dict] = Body(None), svc: UserService = Depends(get_user_service)):
    result = svc.login(payload or {})
    return JSONResponse(
        status_code=200,
        content={"success": True, "message": "Login successful", "user": public_user(result.user)},
        headers=bearer_header(result.token),
    )
