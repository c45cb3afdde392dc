from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from family_expenses.core.errors import NotFoundError
from family_expenses.models.entities import Family, FamilyMember, UserProfile


def get_member_entry(db: Session, family_id: str, user_id: str) -> FamilyMember | None:
    return db.execute(
        select(FamilyMember).where(FamilyMember.family_id == family_id, FamilyMember.user_id == user_id)
    ).scalar_one_or_none()


def count_members(db: Session, family_id: str) -> int:
    return db.execute(select(func.count(FamilyMember.id)).where(FamilyMember.family_id == family_id)).scalar_one()


def require_family(db: Session, family_id: str) -> Family:
    family = db.get(Family, family_id)
    if family is None:
        raise NotFoundError("family not found")
    return family


def require_caller_family(db: Session, user_id: str) -> Family:
    """Family the user currently belongs to, without bootstrapping one."""
    profile = db.get(UserProfile, user_id)
    if profile is None or profile.family_id is None:
        raise NotFoundError("user does not belong to a family")
    return require_family(db, profile.family_id)


def touch_family(family: Family) -> None:
    # Bumps the row version so concurrent writers to the same family conflict.
    family.updated_at = datetime.now(timezone.utc)
