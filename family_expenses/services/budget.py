from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from family_expenses.core.auth import AuthContext
from family_expenses.core.config import settings
from family_expenses.core.db import transaction
from family_expenses.models.entities import Expense, UserProfile
from family_expenses.services.access import touch_family
from family_expenses.services.membership import bootstrap_family


@dataclass(frozen=True)
class BudgetStatus:
    family_id: str
    monthly_limit: float | None
    warning_percentage: int | None
    period_start_date: date
    period_end_date: date
    spent: float
    remaining: float | None
    warning: bool | None


def month_window(today: date) -> tuple[date, date]:
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def update_budget_limit(db: Session, ctx: AuthContext, monthly_limit: float, warning_percentage: int) -> BudgetStatus:
    """Store the limit on the caller's profile and on their family."""
    with transaction(db):
        family = bootstrap_family(db, ctx.user_id, name=ctx.name, email=ctx.email)
        profile = db.get(UserProfile, ctx.user_id)
        profile.monthly_limit = monthly_limit
        profile.warning_percentage = warning_percentage
        family.monthly_limit = monthly_limit
        family.warning_percentage = warning_percentage
        touch_family(family)
    return budget_status(db, ctx)


def budget_status(db: Session, ctx: AuthContext, today: date | None = None) -> BudgetStatus:
    with transaction(db):
        family = bootstrap_family(db, ctx.user_id, name=ctx.name, email=ctx.email)

    start, end = month_window(today or date.today())
    spent = db.execute(
        select(func.coalesce(func.sum(Expense.amount), 0.0)).where(
            Expense.family_id == family.id,
            Expense.spent_on >= start,
            Expense.spent_on <= end,
        )
    ).scalar_one()

    remaining = None
    warning = None
    if family.monthly_limit is not None:
        remaining = family.monthly_limit - spent
        percentage = family.warning_percentage
        if percentage is None:
            percentage = settings.default_warning_percentage
        threshold = family.monthly_limit * percentage / 100
        warning = remaining <= threshold

    return BudgetStatus(
        family_id=family.id,
        monthly_limit=family.monthly_limit,
        warning_percentage=family.warning_percentage,
        period_start_date=start,
        period_end_date=end,
        spent=float(spent),
        remaining=remaining,
        warning=warning,
    )
