from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from accounts.core.tokens import bearer_header
from accounts.domain.users import public_user, user_record
from accounts.routers.deps import get_user_service, rate_limited
from accounts.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", dependencies=[Depends(rate_limited("auth:register"))])
@router.post("/add", dependencies=[Depends(rate_limited("auth:register"))])
def add(payload: Optional[dict] = Body(None), svc: UserService = Depends(get_user_service)):
    result = svc.register(payload or {})
    return JSONResponse(
        status_code=201,
        content={"success": True, "message": "Register successfully", "newUser": public_user(result.user)},
        headers=bearer_header(result.token),
    )


@router.get("")
def get_all(svc: UserService = Depends(get_user_service)):
    users = svc.list_users()
    return {"success": True, "message": "Users data retrieved Successfully", "data": [user_record(u) for u in users]}


@router.get("/{ID}")
def get_by_id(ID: str, svc: UserService = Depends(get_user_service)):
    user = svc.get_user(ID)
    return {"success": True, "message": "User data retrieved Successfully", "data": [user_record(user)]}


@router.put("/{ID}")
def put(ID: str, payload: Optional[dict] = Body(None), svc: UserService = Depends(get_user_service)):
    user = svc.update(ID, payload or {})
    return {"success": True, "message": "User data updated", "data": user_record(user)}


@router.delete("/{ID}")
def delete_by_id(ID: str, svc: UserService = Depends(get_user_service)):
    svc.delete(ID)
    return {"success": True, "message": "User deleted successfully"}
