# teamhub/db/organizations.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from teamhub import settings
from teamhub.access.permissions import Resource, Role
from teamhub.access.scope import ScopeFilter
from teamhub.db import ATHLETES, ORGANIZATIONS, TEAMS, TESTINGS, TRAINERS
from teamhub.db.accounts import attach_accounts, create_account, search_condition, set_locked, update_account
from teamhub.db.scoping import scope_query
from teamhub.errors import NotFound, missing
from teamhub.utils.logger import log_interaction
from teamhub.utils.pagination import Pagination, paginate

LIMIT_FIELDS = ("teams_limit", "trainers_limit", "athletes_limit", "testings_limit")

# collection counted against each quota
_LIMITED = {
    "teams_limit": TEAMS,
    "trainers_limit": TRAINERS,
    "athletes_limit": ATHLETES,
    "testings_limit": TESTINGS,
}


def _utcnow():
    return datetime.now(timezone.utc)


def default_limits() -> dict:
    return {
        "teams_limit": settings.DEFAULT_TEAMS_LIMIT,
        "trainers_limit": settings.DEFAULT_TRAINERS_LIMIT,
        "athletes_limit": settings.DEFAULT_ATHLETES_LIMIT,
        "testings_limit": settings.DEFAULT_TESTINGS_LIMIT,
    }


async def create_organization(db, name: str, email: str, author, limits: Optional[dict] = None):
    user, password = await create_account(db, name, email, Role.ORGANIZATION.value)
    doc = {
        "user": user["_id"],
        **default_limits(),
        **{k: v for k, v in (limits or {}).items() if k in LIMIT_FIELDS and v is not None},
        "created_at": _utcnow(),
        "updated_at": _utcnow(),
    }
    result = await db[ORGANIZATIONS].insert_one(doc)
    doc["_id"] = result.inserted_id
    await log_interaction(db, doc["_id"], author, "create", "Organization created")
    return doc, password


async def has_capacity(db, organization_id, limit_field: str) -> bool:
    """True when the organization may hold one more record counted by limit_field."""
    org = await db[ORGANIZATIONS].find_one({"_id": organization_id}, {limit_field: 1})
    if not org:
        raise NotFound("Organization")
    used = await db[_LIMITED[limit_field]].count_documents({"organization": organization_id})
    return used < int(org.get(limit_field) or 0)


async def listing(db, pagination: Pagination, scope: ScopeFilter, search: str = "") -> dict:
    query = await scope_query(db, Resource.ORGANIZATION, scope, await search_condition(db, search))
    result = await paginate(db[ORGANIZATIONS], query, pagination, sort=[("created_at", -1)])
    await attach_accounts(db, result["documents"])
    return result


async def get_organization(db, organization_id, scope: ScopeFilter) -> dict:
    query = await scope_query(db, Resource.ORGANIZATION, scope, {"_id": organization_id})
    org = await db[ORGANIZATIONS].find_one(query)
    if not org:
        raise missing(scope, "Organization")
    return org


async def view(db, organization_id, scope: ScopeFilter) -> dict:
    org = await get_organization(db, organization_id, scope)
    (org,) = await attach_accounts(db, [org])
    org["counts"] = {
        "teams": await db[TEAMS].count_documents({"organization": org["_id"]}),
        "trainers": await db[TRAINERS].count_documents({"organization": org["_id"]}),
        "athletes": await db[ATHLETES].count_documents({"organization": org["_id"]}),
        "testings": await db[TESTINGS].count_documents({"organization": org["_id"]}),
    }
    return org


async def edit_account(db, organization_id, scope: ScopeFilter, name: str, email: str, author) -> dict:
    org = await get_organization(db, organization_id, scope)
    await update_account(db, org["user"], name, email)
    await log_interaction(db, org["_id"], author, "edit", "Account updated")
    return org


async def edit_lock(db, organization_id, scope: ScopeFilter, locked: bool, author) -> dict:
    org = await get_organization(db, organization_id, scope)
    await set_locked(db, org["user"], locked)
    if locked:
        await log_interaction(db, org["_id"], author, "lock", "Account locked")
    else:
        await log_interaction(db, org["_id"], author, "unlock", "Account unlocked")
    return org


async def edit_limits(db, organization_id, scope: ScopeFilter, limits: dict, author) -> dict:
    org = await get_organization(db, organization_id, scope)
    changes = {k: int(v) for k, v in limits.items() if k in LIMIT_FIELDS and v is not None}
    if changes:
        await db[ORGANIZATIONS].update_one({"_id": org["_id"]}, {"$set": {**changes, "updated_at": _utcnow()}})
        org.update(changes)
        await log_interaction(
            db, org["_id"], author, "edit", "Limits updated",
            ", ".join(f"{k}={v}" for k, v in sorted(changes.items())),
        )
    return org
