"""Event store: CRUD plus the organizer-only mutation rules.

Responsibilities:
- Strict date (YYYY-MM-DD) and time (HH:MM:SS) parsing
- Future-date check on create, evaluated in the configured EVENT_TIMEZONE
- Authorization hook: only the organizer may update/delete
- Organizer attendance row written in the same transaction as the event
- Partial update: empty fields leave the stored value unchanged
"""
import logging
import re
from datetime import date, datetime, time
from typing import Any, Optional

import pytz
from sqlalchemy.orm import Session

from event_planner.config import settings
from event_planner.errors import ForbiddenError, NotFoundError, ValidationError
from event_planner.models.attendee import AttendanceStatus, AttendeeRole, EventAttendee
from event_planner.models.event import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH, Event

logger = logging.getLogger(__name__)

# strptime alone accepts single-digit fields ("2030-1-5"), so the shape is pinned first.
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}:\d{2}$")

UPDATABLE_FIELDS = ("title", "description", "date", "time", "location")


def parse_date(value: str) -> date:
    if not _DATE_RE.match(value or ""):
        raise ValidationError("invalid date format, use YYYY-MM-DD")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("invalid date format, use YYYY-MM-DD")


def parse_time(value: str) -> time:
    if not _TIME_RE.match(value or ""):
        raise ValidationError("invalid time format, use HH:MM:SS")
    try:
        return datetime.strptime(value, "%H:%M:%S").time()
    except ValueError:
        raise ValidationError("invalid time format, use HH:MM:SS")


def _check_future(event_date: date, event_time: time, now: Optional[datetime] = None) -> None:
    """The combined date + time, read in EVENT_TIMEZONE, must be strictly after now."""
    tz = pytz.timezone(settings.EVENT_TIMEZONE)
    starts_at = tz.localize(datetime.combine(event_date, event_time))
    current = now or datetime.now(pytz.utc)
    if starts_at <= current:
        raise ValidationError("event date and time must be in the future")


def _validate_create_fields(title: str, description: str, date_str: str, time_str: str, location: str) -> None:
    if not title:
        raise ValidationError("event title is required")
    if not date_str:
        raise ValidationError("event date is required")
    if not time_str:
        raise ValidationError("event time is required")
    if not location:
        raise ValidationError("event location is required")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"event title must not exceed {TITLE_MAX_LENGTH} characters")
    if len(description or "") > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(f"event description must not exceed {DESCRIPTION_MAX_LENGTH} characters")


def _check_authorization(event: Event, actor_user_id: int, action: str) -> None:
    """Only the organizer may modify or delete an event."""
    if event.organizer_id != actor_user_id:
        logger.warning("User %s tried to %s event %s owned by %s", actor_user_id, action, event.id, event.organizer_id)
        raise ForbiddenError(f"you are not authorized to {action} this event")


def create_event(
    db: Session,
    title: str,
    description: str,
    date_str: str,
    time_str: str,
    location: str,
    organizer_id: int,
) -> Event:
    """Validate and persist an event; the organizer is attached as a going attendee."""
    _validate_create_fields(title, description, date_str, time_str, location)
    event_date = parse_date(date_str)
    event_time = parse_time(time_str)
    _check_future(event_date, event_time)

    event = Event(
        title=title,
        description=description or "",
        date=event_date,
        time=event_time,
        location=location,
        organizer_id=organizer_id,
    )
    db.add(event)
    db.flush()

    db.add(EventAttendee(
        user_id=organizer_id,
        event_id=event.id,
        role=AttendeeRole.organizer,
        status=AttendanceStatus.going,
    ))
    db.commit()
    db.refresh(event)
    logger.info("Created event '%s' (%s) by organizer %s", title, event.id, organizer_id)
    return event


def get_event(db: Session, event_id: int, for_update: bool = False) -> Event:
    """Fetch a single event or raise NotFoundError."""
    query = db.query(Event).filter(Event.id == event_id)
    if for_update:
        query = query.with_for_update()
    event = query.first()
    if not event:
        raise NotFoundError("event not found")
    return event


def list_events(db: Session) -> list[Event]:
    return db.query(Event).order_by(Event.date.desc(), Event.id.desc()).all()


def list_events_by_organizer(db: Session, organizer_id: int) -> list[Event]:
    if organizer_id <= 0:
        raise ValidationError("invalid organizer ID")
    return (
        db.query(Event)
        .filter(Event.organizer_id == organizer_id)
        .order_by(Event.date.desc(), Event.id.desc())
        .all()
    )


def list_events_attended_by(db: Session, user_id: int) -> list[dict[str, Any]]:
    """Every event the user has an attendance row on (organizer included), with their role and status."""
    rows = (
        db.query(Event, EventAttendee.role, EventAttendee.status)
        .join(EventAttendee, EventAttendee.event_id == Event.id)
        .filter(EventAttendee.user_id == user_id)
        .order_by(Event.date.desc(), Event.id.desc())
        .all()
    )
    return [
        {
            "id": event.id,
            "title": event.title,
            "description": event.description,
            "date": event.date,
            "time": event.time,
            "location": event.location,
            "organizer_id": event.organizer_id,
            "created_at": event.created_at,
            "role": role,
            "status": status,
        }
        for event, role, status in rows
    ]


def update_event(db: Session, event_id: int, actor_user_id: int, updates: dict[str, Optional[str]]) -> Event:
    """Apply the non-empty fields of ``updates`` to an event (organizer only).

    Date and time are format-checked only; futurity is enforced on create alone.
    """
    event = get_event(db, event_id, for_update=True)
    _check_authorization(event, actor_user_id, "update")

    changes = {field: updates.get(field) for field in UPDATABLE_FIELDS if updates.get(field)}

    if "title" in changes and len(changes["title"]) > TITLE_MAX_LENGTH:
        raise ValidationError(f"event title must not exceed {TITLE_MAX_LENGTH} characters")
    if "description" in changes and len(changes["description"]) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(f"event description must not exceed {DESCRIPTION_MAX_LENGTH} characters")
    if "date" in changes:
        changes["date"] = parse_date(changes["date"])
    if "time" in changes:
        changes["time"] = parse_time(changes["time"])

    for field, value in changes.items():
        setattr(event, field, value)

    db.commit()
    db.refresh(event)
    logger.info("Updated event %s fields %s", event_id, sorted(changes))
    return event


def delete_event(db: Session, event_id: int, actor_user_id: int) -> None:
    """Delete an event (organizer only); attendees and invitations go with it."""
    event = get_event(db, event_id)
    _check_authorization(event, actor_user_id, "delete")
    db.delete(event)
    db.commit()
    logger.info("Deleted event %s by organizer %s", event_id, actor_user_id)
