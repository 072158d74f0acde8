"""Pytest fixtures: file-backed SQLite database, rebuilt for every test."""
import os
from datetime import datetime, timedelta

import pytest
import pytz
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

SQLITE_URL = "sqlite:///./test.db"

# Must be in place before event_planner.config is imported.
os.environ.setdefault("DATABASE_URL", SQLITE_URL)
os.environ.setdefault("JWT_SECRET", "test-secret-key-with-enough-bytes-for-hs256")
os.environ.setdefault("ENVIRONMENT", "test")

from event_planner.database import Base, enable_sqlite_foreign_keys, get_db  # noqa: E402
from event_planner.main import app  # noqa: E402

# Import all models so they register with Base.metadata
from event_planner.models.user import User                  # noqa: F401,E402
from event_planner.models.event import Event                # noqa: F401,E402
from event_planner.models.attendee import EventAttendee     # noqa: F401,E402
from event_planner.models.invitation import Invitation      # noqa: F401,E402


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
    enable_sqlite_foreign_keys(engine)

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session for direct service-level tests."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_engine):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register_user(client: TestClient, email: str = "alice@example.com", password: str = "secret123") -> dict:
    """Helper: register, then resolve the new account; returns {id, email, token}."""
    resp = client.post("/auth/register", json={"email": email, "password": password})
    assert resp.status_code == 201, resp.text
    token = resp.json()["token"]
    me = client.get("/auth/me", headers=auth_headers(token))
    assert me.status_code == 200, me.text
    return {**me.json()["data"], "token": token}


def future_slot(days: int = 30) -> tuple[str, str]:
    """A (date, time) pair safely in the future."""
    when = datetime.now(pytz.utc) + timedelta(days=days)
    return when.strftime("%Y-%m-%d"), "18:30:00"


def create_test_event(client: TestClient, token: str, **overrides):
    """Helper: POST /events/ with sensible defaults; returns the raw response."""
    date_str, time_str = future_slot()
    payload = {
        "title": "Board Game Night",
        "description": "Bring snacks",
        "date": date_str,
        "time": time_str,
        "location": "Community Hall",
    }
    payload.update(overrides)
    return client.post("/events/", json=payload, headers=auth_headers(token))
