# teamhub/routes/auth.py
from datetime import datetime, timedelta, timezone
import logging
import uuid

from fastapi import APIRouter, Depends, Request

from teamhub import settings
from teamhub.auth import (
    authenticate_user,
    create_access_token,
    create_refresh_token,
    decode_token,
    get_password_hash,
    get_user_by_email,
    is_refresh_active,
    revoke_refresh_token,
)
from teamhub.db import PASSWORD_RESETS, USERS, get_db
from teamhub.errors import BadRequest, Unauthenticated
from teamhub.schemas.accounts import ForgotRequest, LoginRequest, ResetRequest
from teamhub.utils.ids import parse_object_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

REFRESH_SESSION_KEY = "refresh_token"


def _utcnow():
    return datetime.now(timezone.utc)


async def _user_from_session(request: Request, db) -> dict:
    """Account behind the session's refresh token; 401 when there is none."""
    raw = request.session.get(REFRESH_SESSION_KEY)
    if not raw:
        raise Unauthenticated()
    payload = decode_token(raw)
    if not await is_refresh_active(db, payload):
        request.session.pop(REFRESH_SESSION_KEY, None)
        raise Unauthenticated("Session has expired")
    user = await db[USERS].find_one({"_id": _object_id(payload["sub"])})
    if not user or user.get("locked"):
        raise Unauthenticated()
    return user


def _object_id(sub: str):
    oid = parse_object_id(sub)
    if oid is None:
        raise Unauthenticated("Invalid subject")
    return oid


# ---------- Login ----------
@router.post("/v1/login")
async def login(body: LoginRequest, request: Request, db=Depends(get_db)):
    user = await authenticate_user(db, body.email, body.password)
    if not user:
        raise Unauthenticated("Invalid credentials")

    # refresh token lives server-side in the session, access token goes to the client
    request.session[REFRESH_SESSION_KEY] = await create_refresh_token(db, user)
    logger.info("user %s logged in", user["_id"])
    return {"access_token": create_access_token(user), "token_type": "bearer"}


# ---------- Refresh ----------
@router.post("/v1/refresh")
async def refresh(request: Request, db=Depends(get_db)):
    user = await _user_from_session(request, db)
    return {"access_token": create_access_token(user), "token_type": "bearer"}


# ---------- Status ----------
@router.get("/v1/status")
async def auth_status(request: Request, db=Depends(get_db)):
    if not request.session.get(REFRESH_SESSION_KEY):
        return {}
    try:
        user = await _user_from_session(request, db)
    except Unauthenticated:
        return {}
    return {"access_token": create_access_token(user), "token_type": "bearer"}


# ---------- Logout ----------
@router.post("/v1/logout")
async def logout(request: Request, db=Depends(get_db)):
    raw = request.session.pop(REFRESH_SESSION_KEY, None)
    if raw:
        try:
            payload = decode_token(raw)
        except Unauthenticated:
            payload = None
        if payload:
            await revoke_refresh_token(db, payload["jti"], reason="logout")
    request.session.clear()
    return {"message": "Logged out"}


# ---------- Forgot Password ----------
@router.post("/v1/forgot")
async def forgot_password(body: ForgotRequest, db=Depends(get_db)):
    user = await get_user_by_email(db, body.email)
    # same answer whether or not the address is registered
    if user:
        token = uuid.uuid4().hex
        await db[PASSWORD_RESETS].insert_one({
            "email": user["email"],
            "token": token,
            "created_at": _utcnow(),
            "expires_at": _utcnow() + timedelta(minutes=settings.RESET_TOKEN_EXPIRE_MIN),
        })
        # delivery by e-mail is handled outside this service
        logger.debug("password reset token issued for %s: %s", user["email"], token)
    return {"message": "If the address is registered, reset instructions have been sent."}


# ---------- Reset Password ----------
@router.post("/v1/reset/{token}")
async def reset_password(token: str, body: ResetRequest, db=Depends(get_db)):
    if body.password != body.confirm_password:
        raise BadRequest("Passwords do not match")

    reset = await db[PASSWORD_RESETS].find_one({"token": token, "email": body.email})
    if not reset:
        raise BadRequest("Invalid or expired reset token")
    expires_at = reset["expires_at"]
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    if expires_at < _utcnow():
        await db[PASSWORD_RESETS].delete_one({"_id": reset["_id"]})
        raise BadRequest("Invalid or expired reset token")

    await db[USERS].update_one(
        {"email": body.email},
        {"$set": {"password": get_password_hash(body.password), "updated_at": _utcnow()}},
    )
    await db[PASSWORD_RESETS].delete_many({"email": body.email})
    return {"message": "Password updated successfully"}
