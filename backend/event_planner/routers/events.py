"""Event API routes: delegates to the event and attendance services.

GET routes are public; everything that writes, and the /my views, need a
bearer token. Responses are wrapped as {"data": ...} or {"message": ..., "data": ...}.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from event_planner.database import get_db
from event_planner.dependencies import get_current_user
from event_planner.models.user import User
from event_planner.schemas.event import (
    AttendanceUpdate,
    AttendeeOut,
    EventCreate,
    EventOut,
    EventUpdate,
    EventWithAttendanceOut,
    InviteUserRequest,
)
from event_planner.schemas.invitation import InvitationDetailOut
from event_planner.services import attendance_service, event_service, invitation_service

router = APIRouter()


def _events_out(events) -> list[EventOut]:
    return [EventOut.model_validate(e) for e in events]


@router.get("/")
def list_events(db: Session = Depends(get_db)):
    """List all events, latest date first."""
    return {"data": _events_out(event_service.list_events(db))}


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create an event; the caller becomes its organizer."""
    event = event_service.create_event(
        db=db,
        title=payload.title,
        description=payload.description,
        date_str=payload.date,
        time_str=payload.time,
        location=payload.location,
        organizer_id=current_user.id,
    )
    return {"message": "event created successfully", "data": EventOut.model_validate(event)}


@router.get("/my/attending")
def my_attending_events(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Events the caller takes part in, including the ones they organize."""
    rows = event_service.list_events_attended_by(db, current_user.id)
    return {"data": [EventWithAttendanceOut.model_validate(row) for row in rows]}


@router.get("/my/organized")
def my_organized_events(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"data": _events_out(event_service.list_events_by_organizer(db, current_user.id))}


@router.get("/organizer/{organizer_id}")
def events_by_organizer(organizer_id: int, db: Session = Depends(get_db)):
    return {"data": _events_out(event_service.list_events_by_organizer(db, organizer_id))}


@router.get("/{event_id}")
def get_event(event_id: int, db: Session = Depends(get_db)):
    """Fetch a single event by ID."""
    return {"data": EventOut.model_validate(event_service.get_event(db, event_id))}


@router.put("/{event_id}")
def update_event(
    event_id: int,
    payload: EventUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Partially update an event (organizer only). Empty fields are left unchanged."""
    event = event_service.update_event(
        db=db,
        event_id=event_id,
        actor_user_id=current_user.id,
        updates=payload.model_dump(),
    )
    return {"message": "event updated successfully", "data": EventOut.model_validate(event)}


@router.delete("/{event_id}")
def delete_event(event_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Delete an event (organizer only)."""
    event_service.delete_event(db, event_id, current_user.id)
    return {"message": "event deleted successfully"}


@router.post("/{event_id}/join")
def join_event(event_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    attendance_service.join_event(db, current_user.id, event_id)
    return {"message": "successfully joined event"}


@router.post("/{event_id}/invite")
def invite_user(
    event_id: int,
    payload: InviteUserRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Directly add a user to the event (organizer only), skipping the invitation flow."""
    attendance_service.invite_user_to_event(db, event_id, current_user.id, payload.user_id, payload.role)
    return {"message": "user invited to event successfully"}


@router.put("/{event_id}/attendance")
def update_attendance(
    event_id: int,
    payload: AttendanceUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    attendance_service.update_attendance_status(db, current_user.id, event_id, payload.status)
    return {"message": "attendance status updated successfully"}


@router.get("/{event_id}/attendees")
def list_attendees(event_id: int, db: Session = Depends(get_db)):
    """Attendance rows for an event, newest first."""
    attendees = attendance_service.list_attendees(db, event_id)
    return {"data": [AttendeeOut.model_validate(a) for a in attendees]}


@router.get("/{event_id}/invitations")
def list_event_invitations(event_id: int, db: Session = Depends(get_db)):
    rows = invitation_service.list_invitations_for_event(db, event_id)
    return {"data": [InvitationDetailOut.model_validate(row) for row in rows]}
