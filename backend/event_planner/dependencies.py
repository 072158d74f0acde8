"""Authentication dependencies: bearer token to User."""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from event_planner.database import get_db
from event_planner.errors import AuthError
from event_planner.models.user import User
from event_planner.services import auth_service

# auto_error=False so a missing header goes through our own error envelope.
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Verify the bearer token and return the user it identifies."""
    if not credentials or not credentials.credentials:
        raise AuthError("missing authorization header")
    return auth_service.authenticate_token(db, credentials.credentials)
