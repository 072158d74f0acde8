"""Auth API routes: register, login and the current user."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from event_planner.database import get_db
from event_planner.dependencies import get_current_user
from event_planner.models.user import User
from event_planner.schemas.auth import LoginRequest, RegisterRequest, TokenOut, UserOut
from event_planner.services import auth_service

router = APIRouter()


@router.post("/register", response_model=TokenOut, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account; the response token is already usable."""
    return {"token": auth_service.register(db, payload.email, payload.password)}


@router.post("/login", response_model=TokenOut)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    return {"token": auth_service.login(db, payload.email, payload.password)}


@router.get("/me")
def me(current_user: User = Depends(get_current_user)):
    """Return the account behind the bearer token."""
    return {"data": UserOut.model_validate(current_user)}
