from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from family_expenses.core.auth import AuthContext
from family_expenses.core.db import transaction
from family_expenses.models.entities import Category
from family_expenses.services.access import touch_family
from family_expenses.services.membership import bootstrap_family


def add_category(db: Session, ctx: AuthContext, name: str, color: str) -> Category:
    with transaction(db):
        family = bootstrap_family(db, ctx.user_id, name=ctx.name, email=ctx.email)
        category = Category(family_id=family.id, user_id=ctx.user_id, name=name, color=color)
        db.add(category)
        touch_family(family)
    return category


def list_categories(db: Session, ctx: AuthContext) -> Sequence[Category]:
    with transaction(db):
        family = bootstrap_family(db, ctx.user_id, name=ctx.name, email=ctx.email)
        family_id = family.id
    return db.execute(
        select(Category).where(Category.family_id == family_id).order_by(Category.name.asc())
    ).scalars().all()
