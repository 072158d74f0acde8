"""Attendance: joining events, direct invites and per-user status.

A (user, event) pair has at most one EventAttendee row. Both the pre-check and
the unique constraint surface a duplicate as ConflictError; a second join is
an error, never a silent no-op.
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from event_planner.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from event_planner.models.attendee import AttendanceStatus, AttendeeRole, EventAttendee
from event_planner.models.user import User
from event_planner.services.event_service import get_event

logger = logging.getLogger(__name__)


def get_attendance(db: Session, user_id: int, event_id: int) -> Optional[EventAttendee]:
    return (
        db.query(EventAttendee)
        .filter(EventAttendee.user_id == user_id, EventAttendee.event_id == event_id)
        .first()
    )


def _insert_attendee(db: Session, user_id: int, event_id: int, role: AttendeeRole, conflict_message: str) -> EventAttendee:
    if get_attendance(db, user_id, event_id):
        raise ConflictError(conflict_message)

    attendee = EventAttendee(user_id=user_id, event_id=event_id, role=role, status=AttendanceStatus.going)
    db.add(attendee)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent insert for the same pair won the unique constraint.
        db.rollback()
        raise ConflictError(conflict_message)
    db.refresh(attendee)
    return attendee


def join_event(db: Session, user_id: int, event_id: int) -> EventAttendee:
    """Add the caller to an event as a going attendee."""
    get_event(db, event_id)
    attendee = _insert_attendee(db, user_id, event_id, AttendeeRole.attendee, "you have already joined this event")
    logger.info("User %s joined event %s", user_id, event_id)
    return attendee


def invite_user_to_event(db: Session, event_id: int, inviter_id: int, invitee_id: int, role: str) -> EventAttendee:
    """Directly add another user to an event (organizer only).

    This bypasses the Invitation entity: the row is created as going right away.
    """
    try:
        attendee_role = AttendeeRole(role)
    except ValueError:
        raise ValidationError("invalid role: must be 'attendee', 'collaborator', or 'organizer'")

    event = get_event(db, event_id)
    if event.organizer_id != inviter_id:
        logger.warning("User %s tried to invite to event %s owned by %s", inviter_id, event_id, event.organizer_id)
        raise ForbiddenError("only the event creator can invite users to this event")

    if invitee_id == inviter_id:
        raise ValidationError("you cannot invite yourself to the event")
    if invitee_id <= 0 or not db.query(User).filter(User.id == invitee_id).first():
        raise NotFoundError("user not found")

    attendee = _insert_attendee(db, invitee_id, event_id, attendee_role, "user is already attending this event")
    logger.info("User %s added user %s to event %s as %s", inviter_id, invitee_id, event_id, attendee_role.value)
    return attendee


def update_attendance_status(db: Session, user_id: int, event_id: int, status: str) -> EventAttendee:
    """Change the caller's own status on an event they take part in."""
    try:
        new_status = AttendanceStatus(status)
    except ValueError:
        raise ValidationError("invalid status: must be 'going', 'maybe', or 'not_going'")

    attendee = get_attendance(db, user_id, event_id)
    if not attendee:
        raise NotFoundError("attendance record not found")

    attendee.status = new_status
    db.commit()
    db.refresh(attendee)
    logger.info("User %s set status '%s' on event %s", user_id, new_status.value, event_id)
    return attendee


def list_attendees(db: Session, event_id: int) -> list[EventAttendee]:
    """Attendance rows for an event, newest first. Unknown events yield []."""
    return (
        db.query(EventAttendee)
        .filter(EventAttendee.event_id == event_id)
        .order_by(EventAttendee.created_at.desc(), EventAttendee.id.desc())
        .all()
    )
