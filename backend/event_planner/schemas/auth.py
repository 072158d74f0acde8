"""Pydantic schemas for registration, login and the current user."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class RegisterRequest(BaseModel):
    email: str = ""
    password: str = ""


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class TokenOut(BaseModel):
    token: str


class UserOut(BaseModel):
    id: int
    email: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
