from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from family_expenses.core.auth import AuthContext, require_auth
from family_expenses.core.db import get_db
from family_expenses.schemas.categories import CategoryCreate, CategoryListResponse, CategoryResponse
from family_expenses.services import categories as category_service

router = APIRouter(prefix="/v1/categories", tags=["categories"])


@router.get("", response_model=CategoryListResponse)
def list_categories(
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    items = category_service.list_categories(db, ctx)
    return CategoryListResponse(items=[CategoryResponse.model_validate(item, from_attributes=True) for item in items])


@router.post("", response_model=CategoryResponse, status_code=201)
def add_category(
    payload: CategoryCreate,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    category = category_service.add_category(db, ctx, payload.name, payload.color)
    return CategoryResponse.model_validate(category, from_attributes=True)
