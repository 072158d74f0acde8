"""Invitation lifecycle: email-addressed offers resolved by the invitee.

States: pending -> accepted | pending -> declined, exactly once.
Accepting also gives the invitee an attendance row on the event, in the same
transaction as the status change.
"""
import logging
import re
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, aliased

from event_planner.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from event_planner.models.attendee import AttendanceStatus, AttendeeRole, EventAttendee
from event_planner.models.event import Event
from event_planner.models.invitation import MESSAGE_MAX_LENGTH, Invitation, InvitationRole, InvitationStatus
from event_planner.models.user import User
from event_planner.services.attendance_service import get_attendance
from event_planner.services.auth_service import get_user_by_email
from event_planner.services.event_service import get_event

logger = logging.getLogger(__name__)

EMAIL_MAX_LENGTH = 254
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

RESPONSE_STATUSES = (InvitationStatus.accepted, InvitationStatus.declined)


def is_valid_email(email: str) -> bool:
    email = (email or "").strip()
    if len(email) > EMAIL_MAX_LENGTH:
        return False
    return bool(_EMAIL_RE.match(email))


def send_invitation(
    db: Session,
    event_id: int,
    inviter_id: int,
    invitee_email: str,
    role: str,
    message: Optional[str] = None,
) -> Invitation:
    """Record a pending invitation from the event's organizer to an email address.

    The invitee does not need an account yet; ``invitee_id`` is filled in when one exists.
    """
    invitee_email = (invitee_email or "").strip()
    if event_id <= 0:
        raise ValidationError("invalid event ID")
    if not invitee_email:
        raise ValidationError("invitee email is required")
    if not is_valid_email(invitee_email):
        raise ValidationError("invalid email format")
    try:
        invitation_role = InvitationRole(role)
    except ValueError:
        raise ValidationError("invalid role: must be 'attendee' or 'collaborator'")
    if message and len(message) > MESSAGE_MAX_LENGTH:
        raise ValidationError(f"message must not exceed {MESSAGE_MAX_LENGTH} characters")

    event = get_event(db, event_id)
    if event.organizer_id != inviter_id:
        logger.warning("User %s tried to send an invitation for event %s owned by %s", inviter_id, event_id, event.organizer_id)
        raise ForbiddenError("only the event creator can send invitations for this event")

    invitee = get_user_by_email(db, invitee_email)
    invitation = Invitation(
        event_id=event_id,
        inviter_id=inviter_id,
        invitee_email=invitee_email,
        invitee_id=invitee.id if invitee else None,
        role=invitation_role,
        status=InvitationStatus.pending,
        message=message or None,
    )
    db.add(invitation)
    db.commit()
    db.refresh(invitation)
    logger.info("Invitation %s sent for event %s to %s by user %s", invitation.id, event_id, invitee_email, inviter_id)
    return invitation


def _locked_invitation(db: Session, invitation_id: int) -> Invitation:
    invitation = db.query(Invitation).filter(Invitation.id == invitation_id).with_for_update().first()
    if not invitation:
        raise NotFoundError("invitation not found")
    return invitation


def _record_response(invitation: Invitation, status: InvitationStatus, responder: User) -> None:
    invitation.status = status
    invitation.responded_at = datetime.now(timezone.utc)
    invitation.invitee_id = responder.id


def respond_to_invitation(db: Session, invitation_id: int, status: str, responder: User) -> Invitation:
    """Accept or decline a pending invitation addressed to the responder's email."""
    try:
        new_status = InvitationStatus(status)
    except ValueError:
        raise ValidationError("invalid status: must be 'accepted' or 'declined'")
    if new_status not in RESPONSE_STATUSES:
        raise ValidationError("invalid status: must be 'accepted' or 'declined'")

    invitation = _locked_invitation(db, invitation_id)
    if invitation.invitee_email != responder.email:
        logger.warning("User %s tried to respond to invitation %s for %s", responder.id, invitation_id, invitation.invitee_email)
        raise ForbiddenError("you are not authorized to respond to this invitation")
    if invitation.status != InvitationStatus.pending:
        raise ConflictError("invitation has already been responded to")

    _record_response(invitation, new_status, responder)

    if new_status == InvitationStatus.accepted:
        if get_attendance(db, responder.id, invitation.event_id):
            logger.info("User %s already attends event %s; keeping existing row", responder.id, invitation.event_id)
        else:
            db.add(EventAttendee(
                user_id=responder.id,
                event_id=invitation.event_id,
                role=AttendeeRole(invitation.role.value),
                status=AttendanceStatus.going,
            ))

    try:
        db.commit()
    except IntegrityError:
        # A join or direct invite for the same pair committed first; keep that row.
        db.rollback()
        logger.info("User %s joined event %s concurrently; recording response only", responder.id, invitation.event_id)
        invitation = _locked_invitation(db, invitation_id)
        if invitation.status != InvitationStatus.pending:
            raise ConflictError("invitation has already been responded to")
        _record_response(invitation, new_status, responder)
        db.commit()
    db.refresh(invitation)
    logger.info("Invitation %s %s by user %s", invitation_id, new_status.value, responder.id)
    return invitation


def _detail_query(db: Session):
    inviter = aliased(User)
    return (
        db.query(Invitation, Event, inviter.email)
        .join(Event, Invitation.event_id == Event.id)
        .join(inviter, Invitation.inviter_id == inviter.id)
    )


def _with_details(rows) -> list[dict[str, Any]]:
    return [
        {
            "id": invitation.id,
            "event_id": invitation.event_id,
            "inviter_id": invitation.inviter_id,
            "invitee_email": invitation.invitee_email,
            "invitee_id": invitation.invitee_id,
            "role": invitation.role,
            "status": invitation.status,
            "message": invitation.message,
            "created_at": invitation.created_at,
            "responded_at": invitation.responded_at,
            "event_title": event.title,
            "event_date": event.date,
            "event_time": event.time,
            "event_location": event.location,
            "inviter_email": inviter_email,
        }
        for invitation, event, inviter_email in rows
    ]


def list_invitations_for_email(db: Session, email: str) -> list[dict[str, Any]]:
    rows = (
        _detail_query(db)
        .filter(Invitation.invitee_email == email)
        .order_by(Invitation.created_at.desc(), Invitation.id.desc())
        .all()
    )
    return _with_details(rows)


def list_invitations_for_event(db: Session, event_id: int) -> list[dict[str, Any]]:
    rows = (
        _detail_query(db)
        .filter(Invitation.event_id == event_id)
        .order_by(Invitation.created_at.desc(), Invitation.id.desc())
        .all()
    )
    return _with_details(rows)
