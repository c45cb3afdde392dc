from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from family_expenses.core.auth import AuthContext
from family_expenses.core.db import transaction
from family_expenses.models.entities import UserProfile
from family_expenses.services.access import get_member_entry
from family_expenses.services.membership import bootstrap_family

logger = logging.getLogger(__name__)


def register_profile(db: Session, ctx: AuthContext, name: str) -> UserProfile:
    """
    Sign-up side effect: store the caller's profile and give them a family.

    Safe to call again; later calls only refresh the name and email on the
    profile and on the caller's member entry.
    """
    with transaction(db):
        profile = db.get(UserProfile, ctx.user_id)
        if profile is None:
            profile = UserProfile(id=ctx.user_id, name=name, email=ctx.email)
            db.add(profile)
            db.flush()
            logger.info("registered profile for user %s", ctx.user_id)
        else:
            profile.name = name
            if ctx.email:
                profile.email = ctx.email

        family = bootstrap_family(db, ctx.user_id, name=name, email=ctx.email)
        entry = get_member_entry(db, family.id, ctx.user_id)
        if entry is not None:
            entry.name = name
            entry.email = profile.email
    return profile


def get_profile(db: Session, ctx: AuthContext) -> UserProfile:
    with transaction(db):
        bootstrap_family(db, ctx.user_id, name=ctx.name, email=ctx.email)
        profile = db.get(UserProfile, ctx.user_id)
    return profile
