"""Invitation ORM model: an offer to join an event, addressed by email."""
import enum
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Enum as SAEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from event_planner.database import Base

MESSAGE_MAX_LENGTH = 500


class InvitationRole(str, enum.Enum):
    attendee = "attendee"
    collaborator = "collaborator"


class InvitationStatus(str, enum.Enum):
    pending = "pending"
    accepted = "accepted"
    declined = "declined"


class Invitation(Base):
    __tablename__ = "invitations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    inviter_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    invitee_email = Column(String(254), nullable=False, index=True)
    invitee_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    role = Column(SAEnum(InvitationRole, native_enum=False, length=20), nullable=False)
    status = Column(
        SAEnum(InvitationStatus, native_enum=False, length=20),
        nullable=False,
        default=InvitationStatus.pending,
    )
    message = Column(String(MESSAGE_MAX_LENGTH), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    responded_at = Column(DateTime(timezone=True), nullable=True)

    event = relationship("Event", back_populates="invitations")
    inviter = relationship("User", foreign_keys=[inviter_id])
