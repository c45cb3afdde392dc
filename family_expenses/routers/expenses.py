from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from family_expenses.core.auth import AuthContext, require_auth
from family_expenses.core.db import get_db
from family_expenses.schemas.expenses import ExpenseCreate, ExpenseListResponse, ExpenseResponse, ExpenseUpdate
from family_expenses.services import expenses as expense_service

router = APIRouter(prefix="/v1/expenses", tags=["expenses"])


@router.get("", response_model=ExpenseListResponse)
def list_expenses(
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    items = expense_service.list_expenses(db, ctx)
    return ExpenseListResponse(items=[ExpenseResponse.model_validate(item, from_attributes=True) for item in items])


@router.post("", response_model=ExpenseResponse, status_code=201)
def add_expense(
    payload: ExpenseCreate,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    expense = expense_service.add_expense(
        db,
        ctx,
        amount=payload.amount,
        spent_on=payload.spent_on,
        category_id=payload.category_id,
        currency=payload.currency,
    )
    return ExpenseResponse.model_validate(expense, from_attributes=True)


@router.patch("/{expense_id}", response_model=ExpenseResponse)
def update_expense(
    expense_id: str,
    payload: ExpenseUpdate,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    expense = expense_service.update_expense(
        db,
        ctx,
        expense_id,
        amount=payload.amount,
        spent_on=payload.spent_on,
        category_id=payload.category_id,
        currency=payload.currency,
    )
    return ExpenseResponse.model_validate(expense, from_attributes=True)


@router.delete("/{expense_id}", status_code=204)
def delete_expense(
    expense_id: str,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    expense_service.delete_expense(db, ctx, expense_id)
