from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Header

from family_expenses.core.config import settings
from family_expenses.core.errors import AuthError


@dataclass(frozen=True)
class AuthContext:
    user_id: str
    email: str | None = None
    name: str | None = None


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def get_auth_context(
    x_forwarded_user: str | None = Header(default=None, alias="X-Forwarded-User"),
    x_forwarded_email: str | None = Header(default=None, alias="X-Forwarded-Email"),
    x_forwarded_name: str | None = Header(default=None, alias="X-Forwarded-Name"),
    x_dev_user: str | None = Header(default=None, alias="X-Dev-User"),
) -> AuthContext | None:
    """
    Auth boundary.

    In prod, requests are expected to be behind a forward-auth proxy, which injects
    X-Forwarded-User (the user id) and optionally the email and display name.
    In dev/tests, X-Dev-User is accepted as well.
    """
    user_id = _clean(x_forwarded_user)
    if user_id is None and settings.auth_mode == "dev":
        user_id = _clean(x_dev_user)
    if user_id is None:
        return None

    email = _clean(x_forwarded_email)
    return AuthContext(
        user_id=user_id,
        email=email.lower() if email else None,
        name=_clean(x_forwarded_name),
    )


def require_auth(ctx: AuthContext | None = Depends(get_auth_context)) -> AuthContext:
    if ctx is None:
        raise AuthError("user not authenticated")
    return ctx
