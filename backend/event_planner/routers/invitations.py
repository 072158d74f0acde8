"""Invitation API routes.

The invitee is whoever owns the bearer token; their email is looked up
server-side rather than taken from the request.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from event_planner.database import get_db
from event_planner.dependencies import get_current_user
from event_planner.models.user import User
from event_planner.schemas.invitation import (
    InvitationCreate,
    InvitationDetailOut,
    InvitationOut,
    InvitationRespond,
)
from event_planner.services import invitation_service

router = APIRouter()


@router.post("/", status_code=status.HTTP_201_CREATED)
def send_invitation(
    payload: InvitationCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Invite an email address to an event the caller organizes."""
    invitation = invitation_service.send_invitation(
        db=db,
        event_id=payload.event_id,
        inviter_id=current_user.id,
        invitee_email=payload.invitee_email,
        role=payload.role,
        message=payload.message,
    )
    return {"message": "invitation sent successfully", "data": InvitationOut.model_validate(invitation)}


@router.get("/my")
def my_invitations(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Invitations addressed to the caller's email, newest first."""
    rows = invitation_service.list_invitations_for_email(db, current_user.email)
    return {"data": [InvitationDetailOut.model_validate(row) for row in rows]}


@router.put("/{invitation_id}/respond")
def respond_to_invitation(
    invitation_id: int,
    payload: InvitationRespond,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Accept or decline; accepting also adds the caller to the event."""
    invitation_service.respond_to_invitation(db, invitation_id, payload.status, current_user)
    return {"message": "invitation response recorded successfully"}
