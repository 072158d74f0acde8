"""Pydantic schemas for Events and attendance.

Request bodies default every field to "" so that missing and empty values
reach the service layer alike: required on create, "leave unchanged" on update.
"""
import datetime as dt
from typing import Optional
from pydantic import BaseModel

from event_planner.models.attendee import AttendanceStatus, AttendeeRole


class EventCreate(BaseModel):
    title: str = ""
    description: str = ""
    date: str = ""  # YYYY-MM-DD
    time: str = ""  # HH:MM:SS
    location: str = ""


class EventUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    location: Optional[str] = None


class EventOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = ""
    date: dt.date
    time: dt.time
    location: str
    organizer_id: int
    created_at: Optional[dt.datetime] = None

    model_config = {"from_attributes": True}


class EventWithAttendanceOut(EventOut):
    """An event plus the caller's own role and status on it."""

    role: AttendeeRole
    status: AttendanceStatus


class AttendeeOut(BaseModel):
    id: int
    user_id: int
    event_id: int
    role: AttendeeRole
    status: AttendanceStatus
    created_at: Optional[dt.datetime] = None

    model_config = {"from_attributes": True}


class InviteUserRequest(BaseModel):
    user_id: int = 0
    role: str = ""  # attendee, collaborator or organizer


class AttendanceUpdate(BaseModel):
    status: str = ""  # going, maybe, not_going
