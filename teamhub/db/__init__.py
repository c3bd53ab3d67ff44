# teamhub/db/__init__.py
from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient

from teamhub import settings

# --- Collections (one source of truth) ---
USERS = "users"
ORGANIZATIONS = "organizations"
TEAMS = "teams"
TRAINERS = "trainers"
ATHLETES = "athletes"
TESTINGS = "testings"
INTERACTIONS = "interactions"
SESSIONS = "sessions"
PASSWORD_RESETS = "password_resets"
AUDIT_EVENTS = "audit_events"


def create_database(uri: str = None, name: str = None):
    """Motor database handle. The client connects lazily on first use."""
    client = AsyncIOMotorClient(uri or settings.MONGO_URI)
    return client[name or settings.MONGO_DB]


def get_db(request: Request):
    """Dependency: the database handle attached to the running app."""
    return request.app.state.db
