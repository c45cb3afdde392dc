"""
Family membership and invitation transfer.

Every user belongs to exactly one family. Accepting an invitation moves the
caller, together with the expenses and categories they own, from their current
family into the inviter's family; removing a member moves that member into a
fresh family of their own. Each mutating operation runs as one transaction, and
every family it changes is touched so that concurrent writers to the same
family conflict instead of interleaving.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol, TypeVar

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.orm import Session

from family_expenses.core.auth import AuthContext
from family_expenses.core.config import settings
from family_expenses.core.db import transaction
from family_expenses.core.errors import AuthorizationError, InvalidStateError, NotFoundError
from family_expenses.models.entities import (
    Category,
    Expense,
    Family,
    FamilyMember,
    Invitation,
    InvitationStatusEnum,
    UserProfile,
)
from family_expenses.services.access import (
    count_members,
    get_member_entry,
    require_caller_family,
    require_family,
    touch_family,
)

logger = logging.getLogger(__name__)


class Owned(Protocol):
    user_id: str


OwnedT = TypeVar("OwnedT", bound=Owned)


@dataclass(frozen=True)
class MemberView:
    id: str
    name: str | None
    email: str | None


def partition_by_owner(records: Iterable[OwnedT], owner_id: str) -> tuple[list[OwnedT], list[OwnedT]]:
    """Split records into (owned by owner_id, owned by anyone else)."""
    owned: list[OwnedT] = []
    others: list[OwnedT] = []
    for record in records:
        (owned if record.user_id == owner_id else others).append(record)
    return owned, others


def categories_referenced(expenses: Iterable[Expense]) -> set[str]:
    return {expense.category_id for expense in expenses if expense.category_id}


def _now() -> datetime:
    return datetime.now(timezone.utc)


# -- bootstrap -----------------------------------------------------------------


def bootstrap_family(db: Session, user_id: str, name: str | None = None, email: str | None = None) -> Family:
    """
    Return the user's family, creating a singleton family if they have none.

    Does not commit; callers run it inside their own transaction. The family is
    claimed with a conditional update on ``users.family_id IS NULL`` so that two
    first reads racing for the same user end up sharing the winner's family.
    """
    profile = db.get(UserProfile, user_id)
    if profile is None:
        profile = UserProfile(id=user_id, name=name, email=email)
        db.add(profile)
        db.flush()

    if profile.family_id is not None:
        family = db.get(Family, profile.family_id)
        if family is None:
            raise NotFoundError("family document does not exist")
        return family

    family = Family(
        monthly_limit=settings.default_monthly_limit,
        warning_percentage=settings.default_warning_percentage,
    )
    db.add(family)
    db.flush()

    claimed = db.execute(
        update(UserProfile)
        .where(UserProfile.id == user_id, UserProfile.family_id.is_(None))
        .values(family_id=family.id, version=UserProfile.version + 1)
        .execution_options(synchronize_session=False)
    ).rowcount
    profile = db.get(UserProfile, user_id, populate_existing=True)

    if not claimed:
        logger.warning("lost family bootstrap race for user %s; using family %s", user_id, profile.family_id)
        db.delete(family)
        db.flush()
        return require_family(db, profile.family_id)

    db.add(
        FamilyMember(
            family_id=family.id,
            user_id=user_id,
            name=profile.name or name,
            email=profile.email or email,
        )
    )
    db.flush()
    logger.info("bootstrapped family %s for user %s", family.id, user_id)
    return family


def ensure_family(db: Session, user_id: str, name: str | None = None, email: str | None = None) -> Family:
    with transaction(db):
        family = bootstrap_family(db, user_id, name=name, email=email)
    return family


# -- reads -----------------------------------------------------------------------


def get_family(db: Session, ctx: AuthContext) -> Family:
    return ensure_family(db, ctx.user_id, name=ctx.name, email=ctx.email)


def list_members(db: Session, family_id: str) -> Sequence[FamilyMember]:
    return db.execute(
        select(FamilyMember).where(FamilyMember.family_id == family_id).order_by(FamilyMember.id.asc())
    ).scalars().all()


def get_family_members(db: Session, ctx: AuthContext, ids: Sequence[str] | None = None) -> list[MemberView]:
    """Profiles for the given user ids; defaults to the caller alone."""
    target_ids = list(ids) if ids else [ctx.user_id]
    profiles = db.execute(select(UserProfile).where(UserProfile.id.in_(target_ids))).scalars().all()
    by_id = {profile.id: profile for profile in profiles}
    views = []
    for user_id in target_ids:
        profile = by_id.get(user_id)
        views.append(
            MemberView(
                id=user_id,
                name=profile.name if profile else None,
                email=profile.email if profile else None,
            )
        )
    return views


def search_users(db: Session, ctx: AuthContext, query: str, limit: int = 25) -> Sequence[UserProfile]:
    term = query.strip().lower()
    return db.execute(
        select(UserProfile)
        .where(
            or_(
                func.lower(UserProfile.name).contains(term, autoescape=True),
                func.lower(UserProfile.email).contains(term, autoescape=True),
            )
        )
        .order_by(UserProfile.name.asc(), UserProfile.id.asc())
        .limit(limit)
    ).scalars().all()


def get_pending_invitations(db: Session, ctx: AuthContext) -> Sequence[Invitation]:
    return db.execute(
        select(Invitation)
        .where(Invitation.to_user_id == ctx.user_id, Invitation.status == InvitationStatusEnum.pending)
        .order_by(Invitation.created_at.asc())
    ).scalars().all()


def get_sent_invitations(db: Session, ctx: AuthContext) -> Sequence[Invitation]:
    return db.execute(
        select(Invitation)
        .where(Invitation.from_user_id == ctx.user_id, Invitation.status == InvitationStatusEnum.pending)
        .order_by(Invitation.created_at.asc())
    ).scalars().all()


# -- invitations -----------------------------------------------------------------


def invite_family_member(db: Session, ctx: AuthContext, to_user_id: str) -> Invitation:
    """Record a pending invitation. Repeated invitations between the same pair are allowed."""
    if to_user_id == ctx.user_id:
        raise InvalidStateError("cannot invite yourself")

    with transaction(db):
        sender = db.get(UserProfile, ctx.user_id)
        invitee = db.get(UserProfile, to_user_id)
        invitation = Invitation(
            from_user_id=ctx.user_id,
            from_user_name=(sender.name if sender else None) or ctx.name or ctx.email,
            to_user_id=to_user_id,
            to_user_name=(invitee.name or invitee.email) if invitee else None,
            status=InvitationStatusEnum.pending,
        )
        db.add(invitation)

    logger.info("invitation %s sent from %s to %s", invitation.id, ctx.user_id, to_user_id)
    return invitation


def _require_pending_invitation(db: Session, ctx: AuthContext, invitation_id: str) -> Invitation:
    invitation = db.get(Invitation, invitation_id)
    if invitation is None:
        raise NotFoundError("invitation not found")
    if invitation.to_user_id != ctx.user_id:
        raise AuthorizationError("not authorized to act on this invitation")
    if invitation.status != InvitationStatusEnum.pending:
        raise InvalidStateError(f"invitation is already {invitation.status.value}")
    return invitation


def reject_invitation(db: Session, ctx: AuthContext, invitation_id: str) -> Invitation:
    with transaction(db):
        invitation = _require_pending_invitation(db, ctx, invitation_id)
        invitation.status = InvitationStatusEnum.rejected
        invitation.resolved_at = _now()

    logger.info("invitation %s rejected by %s", invitation_id, ctx.user_id)
    return invitation


def _transfer_member(
    db: Session,
    source: Family,
    target: Family,
    profile: UserProfile,
    name: str | None,
    email: str | None,
) -> None:
    """Move the user's member entry and owned records from source into target."""
    user_id = profile.id
    db.execute(
        update(Expense)
        .where(Expense.family_id == source.id, Expense.user_id == user_id)
        .values(family_id=target.id)
        .execution_options(synchronize_session=False)
    )
    db.execute(
        update(Category)
        .where(Category.family_id == source.id, Category.user_id == user_id)
        .values(family_id=target.id)
        .execution_options(synchronize_session=False)
    )

    entry = get_member_entry(db, source.id, user_id)
    if entry is None:
        db.add(FamilyMember(family_id=target.id, user_id=user_id, name=name, email=email))
    else:
        entry.family_id = target.id
        entry.name = name or entry.name
        entry.email = email or entry.email

    profile.family_id = target.id
    db.flush()

    if count_members(db, source.id) == 0:
        # Records left behind belong to nobody in the family any more.
        db.execute(delete(Expense).where(Expense.family_id == source.id))
        db.execute(delete(Category).where(Category.family_id == source.id))
        db.delete(source)
        logger.info("deleted emptied family %s", source.id)
    else:
        touch_family(source)


def accept_invitation(db: Session, ctx: AuthContext, invitation_id: str) -> Family:
    """
    Join the inviter's family, bringing along everything the caller owns.

    The caller adopts the target family's budget settings. If the caller's
    previous family ends up without members it is deleted.
    """
    with transaction(db):
        invitation = _require_pending_invitation(db, ctx, invitation_id)
        invitation.status = InvitationStatusEnum.accepted
        invitation.resolved_at = _now()

        inviter = db.get(UserProfile, invitation.from_user_id)
        if inviter is None or inviter.family_id is None:
            raise InvalidStateError("inviting user does not have a family")
        target = require_family(db, inviter.family_id)

        profile = db.get(UserProfile, ctx.user_id)
        if profile is None:
            profile = UserProfile(id=ctx.user_id, name=ctx.name, email=ctx.email)
            db.add(profile)
            db.flush()
        name = ctx.name or profile.name
        email = ctx.email or profile.email

        source = db.get(Family, profile.family_id) if profile.family_id else None
        source_id = source.id if source is not None else None
        if source is not None and source.id == target.id:
            logger.info("user %s already belongs to family %s", ctx.user_id, target.id)
            return target

        if source is not None:
            _transfer_member(db, source, target, profile, name, email)
        else:
            db.add(FamilyMember(family_id=target.id, user_id=ctx.user_id, name=name, email=email))
            profile.family_id = target.id

        profile.monthly_limit = target.monthly_limit
        profile.warning_percentage = target.warning_percentage
        touch_family(target)

    logger.info(
        "user %s joined family %s via invitation %s (left %s)",
        ctx.user_id,
        target.id,
        invitation_id,
        source_id,
    )
    return target


# -- members ---------------------------------------------------------------------


def update_family_member(
    db: Session,
    ctx: AuthContext,
    member_id: str,
    name: str | None = None,
    email: str | None = None,
) -> FamilyMember:
    with transaction(db):
        family = require_caller_family(db, ctx.user_id)
        entry = get_member_entry(db, family.id, member_id)
        if entry is None:
            raise NotFoundError("member not found in the family")
        if name is not None:
            entry.name = name
        if email is not None:
            entry.email = str(email).lower()
        touch_family(family)
    return entry


def remove_family_member(db: Session, ctx: AuthContext, member_id: str) -> Family:
    """
    Split a member off into a new family of their own.

    The removed member takes their expenses and categories along. A category
    they own that another member's expense still uses stays behind; the new
    family gets a copy of it and the moved expenses point at the copy. The new
    family starts without budget settings. The old family always survives.

    Returns the old family, or the new one when the caller removed themselves.
    """
    with transaction(db):
        family = require_caller_family(db, ctx.user_id)
        entry = get_member_entry(db, family.id, member_id)
        if entry is None:
            raise NotFoundError("member not found in the family")
        if count_members(db, family.id) == 1:
            raise InvalidStateError("cannot remove the only member of a family")

        member_profile = db.get(UserProfile, member_id)
        if member_profile is None:
            raise NotFoundError("user profile not found")

        expenses = db.execute(select(Expense).where(Expense.family_id == family.id)).scalars().all()
        moving_expenses, staying_expenses = partition_by_owner(expenses, member_id)
        still_used = categories_referenced(staying_expenses)
        owned_categories = db.execute(
            select(Category).where(Category.family_id == family.id, Category.user_id == member_id)
        ).scalars().all()

        new_family = Family(monthly_limit=None, warning_percentage=None)
        db.add(new_family)
        db.flush()

        replacements: dict[str, str] = {}
        for category in owned_categories:
            if category.id in still_used:
                copy = Category(family_id=new_family.id, user_id=member_id, name=category.name, color=category.color)
                db.add(copy)
                db.flush()
                replacements[category.id] = copy.id
            else:
                category.family_id = new_family.id

        for expense in moving_expenses:
            expense.family_id = new_family.id
            if expense.category_id in replacements:
                expense.category_id = replacements[expense.category_id]

        entry.family_id = new_family.id
        member_profile.family_id = new_family.id
        touch_family(family)

    logger.info(
        "member %s removed from family %s by %s into new family %s (%d expenses, %d shared categories kept)",
        member_id,
        family.id,
        ctx.user_id,
        new_family.id,
        len(moving_expenses),
        len(replacements),
    )
    if member_id == ctx.user_id:
        return new_family
    return family
