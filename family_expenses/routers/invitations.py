from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from family_expenses.core.auth import AuthContext, require_auth
from family_expenses.core.db import get_db
from family_expenses.models.entities import Invitation
from family_expenses.routers.families import family_response
from family_expenses.schemas.families import FamilyResponse
from family_expenses.schemas.invitations import InvitationCreate, InvitationListResponse, InvitationResponse
from family_expenses.services import membership

router = APIRouter(prefix="/v1/invitations", tags=["invitations"])


def _invitation_response(invitation: Invitation) -> InvitationResponse:
    return InvitationResponse(
        id=invitation.id,
        from_user_id=invitation.from_user_id,
        from_user_name=invitation.from_user_name,
        to_user_id=invitation.to_user_id,
        to_user_name=invitation.to_user_name,
        status=invitation.status.value,
    )


@router.post("", response_model=InvitationResponse, status_code=201)
def invite_family_member(
    payload: InvitationCreate,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    invitation = membership.invite_family_member(db, ctx, payload.to_user_id)
    return _invitation_response(invitation)


@router.get("/pending", response_model=InvitationListResponse)
def get_pending_invitations(
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    items = membership.get_pending_invitations(db, ctx)
    return InvitationListResponse(items=[_invitation_response(item) for item in items])


@router.get("/sent", response_model=InvitationListResponse)
def get_sent_invitations(
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    items = membership.get_sent_invitations(db, ctx)
    return InvitationListResponse(items=[_invitation_response(item) for item in items])


@router.post("/{invitation_id}/accept", response_model=FamilyResponse)
def accept_invitation(
    invitation_id: str,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    family = membership.accept_invitation(db, ctx, invitation_id)
    return family_response(db, family)


@router.post("/{invitation_id}/reject", response_model=InvitationResponse)
def reject_invitation(
    invitation_id: str,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    invitation = membership.reject_invitation(db, ctx, invitation_id)
    return _invitation_response(invitation)
