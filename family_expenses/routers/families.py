from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from family_expenses.core.auth import AuthContext, require_auth
from family_expenses.core.db import get_db
from family_expenses.models.entities import Category, Family
from family_expenses.schemas.categories import CategoryResponse
from family_expenses.schemas.expenses import ExpenseResponse
from family_expenses.schemas.families import (
    FamilyMemberListResponse,
    FamilyMemberResponse,
    FamilyMemberUpdate,
    FamilyResponse,
)
from family_expenses.services import membership
from family_expenses.services.expenses import list_family_expenses

router = APIRouter(prefix="/v1/family", tags=["families"])


def family_response(db: Session, family: Family) -> FamilyResponse:
    members = membership.list_members(db, family.id)
    expenses = list_family_expenses(db, family.id)
    categories = db.execute(
        select(Category).where(Category.family_id == family.id).order_by(Category.name.asc())
    ).scalars().all()
    return FamilyResponse(
        id=family.id,
        members=[FamilyMemberResponse(id=item.user_id, name=item.name, email=item.email) for item in members],
        expenses=[ExpenseResponse.model_validate(item, from_attributes=True) for item in expenses],
        categories=[CategoryResponse.model_validate(item, from_attributes=True) for item in categories],
        monthly_limit=family.monthly_limit,
        warning_percentage=family.warning_percentage,
    )


@router.get("", response_model=FamilyResponse)
def get_family(
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    family = membership.get_family(db, ctx)
    return family_response(db, family)


@router.get("/members", response_model=FamilyMemberListResponse)
def get_family_members(
    ids: list[str] | None = Query(default=None),
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    views = membership.get_family_members(db, ctx, ids)
    return FamilyMemberListResponse(
        items=[FamilyMemberResponse(id=item.id, name=item.name, email=item.email) for item in views]
    )


@router.patch("/members/{member_id}", response_model=FamilyMemberResponse)
def update_family_member(
    member_id: str,
    payload: FamilyMemberUpdate,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    entry = membership.update_family_member(db, ctx, member_id, name=payload.name, email=payload.email)
    return FamilyMemberResponse(id=entry.user_id, name=entry.name, email=entry.email)


@router.delete("/members/{member_id}", response_model=FamilyResponse)
def remove_family_member(
    member_id: str,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    family = membership.remove_family_member(db, ctx, member_id)
    return family_response(db, family)
