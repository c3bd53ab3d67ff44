# teamhub/db/accounts.py
"""User accounts behind organizations, trainers and athletes."""
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from pymongo.errors import DuplicateKeyError

from teamhub.auth import generate_password, get_password_hash
from teamhub.db import USERS
from teamhub.errors import Conflict


def _utcnow():
    return datetime.now(timezone.utc)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


async def create_account(db, name: str, email: str, role: str) -> Tuple[dict, str]:
    """Insert a user with a generated password. Returns (user, plain password)."""
    email = normalize_email(email)
    if await db[USERS].find_one({"email": email}, {"_id": 1}):
        raise Conflict("Email already registered")

    password = generate_password()
    doc = {
        "name": name.strip(),
        "email": email,
        "password": get_password_hash(password),
        "role": role,
        "locked": False,
        "verified_at": None,
        "created_at": _utcnow(),
        "updated_at": _utcnow(),
    }
    try:
        result = await db[USERS].insert_one(doc)
    except DuplicateKeyError:
        raise Conflict("Email already registered")
    doc["_id"] = result.inserted_id
    return doc, password


async def update_account(db, user_id, name: str, email: str) -> None:
    email = normalize_email(email)
    clash = await db[USERS].find_one({"email": email, "_id": {"$ne": user_id}}, {"_id": 1})
    if clash:
        raise Conflict("Email already registered")
    await db[USERS].update_one(
        {"_id": user_id},
        {"$set": {"name": name.strip(), "email": email, "updated_at": _utcnow()}},
    )


async def set_locked(db, user_id, locked: bool) -> None:
    await db[USERS].update_one({"_id": user_id}, {"$set": {"locked": locked, "updated_at": _utcnow()}})


async def delete_account(db, user_id) -> None:
    await db[USERS].delete_one({"_id": user_id})


def search_pattern(search: str) -> str:
    # "jdoe" also matches "John Doe"
    return ".*".join(re.escape(ch) for ch in search)


async def users_matching(db, search: str) -> List:
    query = {
        "$or": [
            {"name": {"$regex": search_pattern(search), "$options": "i"}},
            {"email": {"$regex": re.escape(search), "$options": "i"}},
        ]
    }
    return [u["_id"] async for u in db[USERS].find(query, {"_id": 1})]


async def search_condition(db, search: Optional[str]) -> dict:
    """Match for entity documents whose account name/email matches `search`."""
    search = (search or "").strip()
    if not search:
        return {}
    return {"user": {"$in": await users_matching(db, search)}}


async def attach_accounts(db, docs: Iterable[dict]) -> List[dict]:
    """Copy name/email/locked from each document's account onto the document."""
    docs = list(docs)
    ids = [d["user"] for d in docs if d.get("user") is not None]
    accounts = {}
    if ids:
        async for u in db[USERS].find({"_id": {"$in": ids}}, {"name": 1, "email": 1, "locked": 1, "verified_at": 1}):
            accounts[u["_id"]] = u
    for d in docs:
        account = accounts.get(d.get("user")) or {}
        d["name"] = account.get("name")
        d["email"] = account.get("email")
        d["locked"] = account.get("locked", False)
        d["verified_at"] = account.get("verified_at")
    return docs
