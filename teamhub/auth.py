# teamhub/auth.py
from datetime import datetime, timedelta, timezone
import logging
import secrets
import uuid
from typing import Optional

from fastapi import Request
from jose import JWTError, jwt
from passlib.context import CryptContext

from teamhub import settings
from teamhub.access.identity import Identity
from teamhub.db import SESSIONS, USERS
from teamhub.errors import Unauthenticated

logger = logging.getLogger(__name__)

# --- crypto ------------------------------------------------------------------
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

# --- password utils ----------------------------------------------------------
def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)

def generate_password() -> str:
    """Initial password for accounts created by an admin or organization."""
    return secrets.token_urlsafe(12)

# --- JWT helpers -------------------------------------------------------------
def _now_utc() -> datetime:
    return datetime.now(timezone.utc)

def _create_jwt(claims: dict, token_type: str, expires_delta: timedelta) -> str:
    iat = _now_utc()
    exp = iat + expires_delta
    payload = {
        **claims,
        "type": token_type,
        "jti": str(uuid.uuid4()),
        "iat": int(iat.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def create_access_token(user: dict) -> str:
    """Stateless access token; carries everything the access layer needs."""
    return _create_jwt(
        {
            "sub": str(user["_id"]),
            "role": user["role"],
            "name": user.get("name"),
            "email": user.get("email"),
        },
        "access",
        timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MIN),
    )

async def create_refresh_token(db, user: dict) -> str:
    token = _create_jwt(
        {"sub": str(user["_id"])},
        "refresh",
        timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
    )
    # persist jti for server-side control
    payload = decode_token(token)
    await db[SESSIONS].insert_one({
        "jti": payload["jti"],
        "sub": payload["sub"],
        "exp": payload["exp"],
        "revoked": False,
        "created_at": _now_utc(),
    })
    return token

def decode_token(raw: str) -> dict:
    try:
        return jwt.decode(raw, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise Unauthenticated("Invalid or expired token")

async def is_refresh_active(db, payload: dict) -> bool:
    if payload.get("type") != "refresh":
        return False
    doc = await db[SESSIONS].find_one({"jti": payload.get("jti"), "revoked": False})
    return doc is not None

async def revoke_refresh_token(db, jti: str, reason: str = "logout") -> None:
    # double-logout is harmless
    await db[SESSIONS].update_one(
        {"jti": jti},
        {"$set": {"revoked": True, "reason": reason, "revoked_at": _now_utc()}},
    )

# --- user lookup -------------------------------------------------------------
async def get_user_by_email(db, email: str) -> Optional[dict]:
    return await db[USERS].find_one({"email": (email or "").strip().lower()})

async def authenticate_user(db, email: str, password: str) -> Optional[dict]:
    user = await get_user_by_email(db, email)
    if not user or not user.get("password"):
        return None
    if not verify_password(password, user["password"]):
        return None
    if user.get("locked"):
        logger.info("login refused for locked account %s", user["_id"])
        return None
    return user

# --- dependency used by the routes -------------------------------------------

def get_current_identity(request: Request) -> Identity:
    """
    Pull the access token from the Authorization header (Bearer).
    Raises 401 when it is missing, invalid, expired or not an access token.
    """
    auth_header = request.headers.get("Authorization") or ""
    if not auth_header.lower().startswith("bearer "):
        raise Unauthenticated()
    token = auth_header.split(" ", 1)[1].strip()
    if not token:
        raise Unauthenticated()

    payload = decode_token(token)
    if payload.get("type") != "access" or not payload.get("sub"):
        raise Unauthenticated("Wrong token type")
    identity = Identity.from_claims(payload)
    request.state.actor = identity.to_dict()
    return identity
