"""User ORM model: account identity for auth."""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from event_planner.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(254), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
