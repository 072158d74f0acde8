"""FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from event_planner.config import settings
from event_planner.database import Base, engine
from event_planner.errors import register_error_handlers

# Import routers
from event_planner.routers import auth, events, invitations

# Import all models so Base.metadata knows about them
from event_planner.models.user import User                  # noqa: F401
from event_planner.models.event import Event                # noqa: F401
from event_planner.models.attendee import EventAttendee     # noqa: F401
from event_planner.models.invitation import Invitation      # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Event Planner",
    description="Event scheduling API: accounts, events, attendance and invitations",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Register routers
app.include_router(auth.router, prefix="/auth", tags=["Auth"])
app.include_router(events.router, prefix="/events", tags=["Events"])
app.include_router(invitations.router, prefix="/invitations", tags=["Invitations"])


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    logger.info("Event Planner started (%s)", settings.ENVIRONMENT)


@app.get("/health")
def health_check():
    return {"status": "ok"}
