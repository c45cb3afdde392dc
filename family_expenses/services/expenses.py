from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from family_expenses.core.auth import AuthContext
from family_expenses.core.config import settings
from family_expenses.core.db import transaction
from family_expenses.core.errors import NotFoundError
from family_expenses.models.entities import Category, Expense, Family, UserProfile
from family_expenses.services.access import touch_family
from family_expenses.services.membership import bootstrap_family

logger = logging.getLogger(__name__)


def _require_category(db: Session, family_id: str, category_id: str) -> Category:
    category = db.get(Category, category_id)
    if category is None or category.family_id != family_id:
        raise NotFoundError("category not found")
    return category


def _require_expense(db: Session, family: Family, expense_id: str) -> Expense:
    expense = db.get(Expense, expense_id)
    if expense is None or expense.family_id != family.id:
        raise NotFoundError("expense not found")
    return expense


def add_expense(
    db: Session,
    ctx: AuthContext,
    amount: float,
    spent_on: date,
    category_id: str | None = None,
    currency: str | None = None,
) -> Expense:
    with transaction(db):
        family = bootstrap_family(db, ctx.user_id, name=ctx.name, email=ctx.email)
        if category_id is not None:
            _require_category(db, family.id, category_id)
        profile = db.get(UserProfile, ctx.user_id)
        expense = Expense(
            family_id=family.id,
            user_id=ctx.user_id,
            user_name=ctx.name or profile.name,
            category_id=category_id,
            amount=amount,
            currency=(currency or settings.default_currency).upper(),
            spent_on=spent_on,
        )
        db.add(expense)
        touch_family(family)
    return expense


def update_expense(
    db: Session,
    ctx: AuthContext,
    expense_id: str,
    amount: float | None = None,
    spent_on: date | None = None,
    category_id: str | None = None,
    currency: str | None = None,
) -> Expense:
    with transaction(db):
        family = bootstrap_family(db, ctx.user_id, name=ctx.name, email=ctx.email)
        expense = _require_expense(db, family, expense_id)
        if category_id is not None:
            _require_category(db, family.id, category_id)
            expense.category_id = category_id
        if amount is not None:
            expense.amount = amount
        if spent_on is not None:
            expense.spent_on = spent_on
        if currency is not None:
            expense.currency = currency.upper()
        touch_family(family)
    return expense


def delete_expense(db: Session, ctx: AuthContext, expense_id: str) -> None:
    with transaction(db):
        family = bootstrap_family(db, ctx.user_id, name=ctx.name, email=ctx.email)
        expense = _require_expense(db, family, expense_id)
        db.delete(expense)
        touch_family(family)
    logger.info("expense %s deleted by %s", expense_id, ctx.user_id)


def list_expenses(db: Session, ctx: AuthContext) -> Sequence[Expense]:
    with transaction(db):
        family = bootstrap_family(db, ctx.user_id, name=ctx.name, email=ctx.email)
        family_id = family.id
    return list_family_expenses(db, family_id)


def list_family_expenses(db: Session, family_id: str) -> Sequence[Expense]:
    return db.execute(
        select(Expense)
        .where(Expense.family_id == family_id)
        .order_by(Expense.spent_on.desc(), Expense.created_at.desc())
    ).scalars().all()
