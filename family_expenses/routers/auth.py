from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from family_expenses.core.auth import AuthContext, require_auth
from family_expenses.core.db import get_db
from family_expenses.schemas.profiles import ProfileRegister, ProfileResponse, UserSearchResponse, UserSearchResult
from family_expenses.services import membership, profiles

router = APIRouter(prefix="/v1", tags=["auth"])


@router.get("/me", response_model=ProfileResponse)
def get_me(
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    """
    Returns the authenticated user's profile.

    The first call for a new user bootstraps their profile and singleton family.
    """
    profile = profiles.get_profile(db, ctx)
    return ProfileResponse.model_validate(profile, from_attributes=True)


@router.post("/me", response_model=ProfileResponse)
def register_me(
    payload: ProfileRegister,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    profile = profiles.register_profile(db, ctx, payload.name)
    return ProfileResponse.model_validate(profile, from_attributes=True)


@router.get("/users/search", response_model=UserSearchResponse)
def search_users(
    q: str = Query(min_length=1, max_length=255),
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    users = membership.search_users(db, ctx, q)
    return UserSearchResponse(
        items=[UserSearchResult(id=user.id, name=user.name, email=user.email) for user in users]
    )
