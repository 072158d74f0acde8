"""EventAttendee ORM model: one attendance row per (user, event)."""
import enum
from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint, Enum as SAEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from event_planner.database import Base


class AttendeeRole(str, enum.Enum):
    organizer = "organizer"
    attendee = "attendee"
    collaborator = "collaborator"


class AttendanceStatus(str, enum.Enum):
    going = "going"
    maybe = "maybe"
    not_going = "not_going"


class EventAttendee(Base):
    __tablename__ = "event_attendees"
    __table_args__ = (UniqueConstraint("user_id", "event_id", name="uq_event_attendees_user_event"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(SAEnum(AttendeeRole, native_enum=False, length=20), nullable=False)
    status = Column(
        SAEnum(AttendanceStatus, native_enum=False, length=20),
        nullable=False,
        default=AttendanceStatus.going,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    event = relationship("Event", back_populates="attendees")
