from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from accounts.domain.categories import category_record
from accounts.routers.deps import get_category_service
from accounts.services.category_service import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("")
def get_all(svc: CategoryService = Depends(get_category_service)):
    categories = svc.list_categories()
    return {
        "success": True,
        "message": "Categories data retrieved Successfully",
        "data": [category_record(c) for c in categories],
    }


@router.post("/add")
def post(payload: Optional[dict] = Body(None), svc: CategoryService = Depends(get_category_service)):
    category = svc.create(payload or {})
    return JSONResponse(
        status_code=201,
        content={"success": True, "message": "Category created", "data": category_record(category)},
    )


# registered before /{ID} so the literal segment wins
@router.get("/name/{CATEGORY}")
def get_by_cat_name(CATEGORY: str, svc: CategoryService = Depends(get_category_service)):
    category = svc.get_by_name(CATEGORY)
    return {"success": True, "message": "Category data retrieved Successfully", "data": [category_record(category)]}


@router.get("/{ID}")
def get_by_id(ID: str, svc: CategoryService = Depends(get_category_service)):
    category = svc.get_by_id(ID)
    return {"success": True, "message": "Category data retrieved Successfully", "data": [category_record(category)]}


@router.put("/{CATEGORY}")
def edit_category(CATEGORY: str, payload: Optional[dict] = Body(None), svc: CategoryService = Depends(get_category_service)):
    category = svc.update(CATEGORY, payload or {})
    return {"success": True, "message": "Category updated", "data": category_record(category)}


@router.delete("/{CATEGORY}")
def delete_category(CATEGORY: str, svc: CategoryService = Depends(get_category_service)):
    svc.delete(CATEGORY)
    return {"success": True, "message": "Category deleted successfully"}
