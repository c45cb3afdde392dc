from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from family_expenses.core.auth import AuthContext, require_auth
from family_expenses.core.db import get_db
from family_expenses.schemas.budget import BudgetLimitUpdate, BudgetStatusResponse
from family_expenses.services import budget as budget_service

router = APIRouter(prefix="/v1/budget", tags=["budget"])


@router.get("", response_model=BudgetStatusResponse)
def get_budget_status(
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    status = budget_service.budget_status(db, ctx)
    return BudgetStatusResponse.model_validate(status, from_attributes=True)


@router.put("", response_model=BudgetStatusResponse)
def update_budget_limit(
    payload: BudgetLimitUpdate,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    status = budget_service.update_budget_limit(db, ctx, payload.monthly_limit, payload.warning_percentage)
    return BudgetStatusResponse.model_validate(status, from_attributes=True)
