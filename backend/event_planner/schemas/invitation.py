"""Pydantic schemas for Invitations."""
import datetime as dt
from typing import Optional
from pydantic import BaseModel

from event_planner.models.invitation import InvitationRole, InvitationStatus


class InvitationCreate(BaseModel):
    event_id: int = 0
    invitee_email: str = ""
    role: str = ""  # attendee or collaborator
    message: Optional[str] = None


class InvitationRespond(BaseModel):
    status: str = ""  # accepted or declined


class InvitationOut(BaseModel):
    id: int
    event_id: int
    inviter_id: int
    invitee_email: str
    invitee_id: Optional[int] = None
    role: InvitationRole
    status: InvitationStatus
    message: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    responded_at: Optional[dt.datetime] = None

    model_config = {"from_attributes": True}


class InvitationDetailOut(InvitationOut):
    """An invitation joined with its event and the inviter's email."""

    event_title: str
    event_date: dt.date
    event_time: dt.time
    event_location: str
    inviter_email: str
