"""User registration and authentication."""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from event_planner.errors import AuthError, ValidationError
from event_planner.models.user import User
from event_planner.security import create_access_token, decode_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

# Same message for unknown email and wrong password, so callers cannot probe for accounts.
INVALID_CREDENTIALS = "invalid email or password"


def register(db: Session, email: str, password: str) -> str:
    """Create an account and return a signed token for it.

    The only password policy is non-empty.
    """
    email = (email or "").strip()
    if not email:
        raise ValidationError("email is required")
    if not password:
        raise ValidationError("password is required")

    if db.query(User).filter(User.email == email).first():
        raise ValidationError("email is already registered")

    user = User(email=email, password_hash=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email.
        db.rollback()
        raise ValidationError("email is already registered")
    db.refresh(user)
    logger.info("Registered user %s (%s)", user.id, user.email)
    return create_access_token(user.id)


def login(db: Session, email: str, password: str) -> str:
    """Verify credentials and return a fresh token."""
    email = (email or "").strip()
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(password, user.password_hash):
        logger.info("Failed login for %s", email)
        raise AuthError(INVALID_CREDENTIALS)
    logger.info("User %s logged in", user.id)
    return create_access_token(user.id)


def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def authenticate_token(db: Session, token: str) -> User:
    """Resolve a bearer token to the user it was issued for."""
    user_id = decode_access_token(token)
    user = get_user_by_id(db, user_id)
    if not user:
        raise AuthError("user not found")
    return user
