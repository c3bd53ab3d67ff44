# teamhub/db/athletes.py
from __future__ import annotations

from datetime import date, datetime, time, timezone

from teamhub.access.permissions import Resource, Role
from teamhub.access.scope import ScopeFilter
from teamhub.db import ATHLETES, TEAMS, TESTINGS
from teamhub.db.accounts import attach_accounts, create_account, delete_account, search_condition, update_account
from teamhub.db.organizations import has_capacity
from teamhub.db.scoping import athletes_of_trainer, scope_query
from teamhub.errors import LimitReached, missing
from teamhub.utils.logger import log_interaction
from teamhub.utils.pagination import Pagination, paginate


def _utcnow():
    return datetime.now(timezone.utc)


def as_datetime(value: date) -> datetime:
    # BSON has no plain date type
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


async def create_athlete(db, organization_id, name: str, email: str, birth_date: date,
                         height: float, weight: float, author):
    if not await has_capacity(db, organization_id, "athletes_limit"):
        raise LimitReached("Athlete")
    user, password = await create_account(db, name, email, Role.ATHLETE.value)
    doc = {
        "user": user["_id"],
        "organization": organization_id,
        "birth_date": as_datetime(birth_date),
        "height": float(height),
        "weight": float(weight),
        "created_at": _utcnow(),
        "updated_at": _utcnow(),
    }
    result = await db[ATHLETES].insert_one(doc)
    doc["_id"] = result.inserted_id
    await log_interaction(db, organization_id, author, "create", "Athlete created", user["name"])
    await log_interaction(db, doc["_id"], author, "create", "Athlete created")
    return doc, password


async def listing(
    db,
    pagination: Pagination,
    scope: ScopeFilter,
    search: str = "",
    organization=None,
    team=None,
    trainer=None,
) -> dict:
    conditions = []
    base = await search_condition(db, search)
    if base:
        conditions.append(base)
    if organization is not None:
        conditions.append({"organization": organization})
    if team is not None:
        found = await db[TEAMS].find_one({"_id": team}, {"athletes": 1})
        conditions.append({"_id": {"$in": (found or {}).get("athletes") or []}})
    if trainer is not None:
        conditions.append({"_id": {"$in": await athletes_of_trainer(db, trainer)}})

    base = {"$and": conditions} if len(conditions) > 1 else (conditions[0] if conditions else None)
    query = await scope_query(db, Resource.ATHLETE, scope, base)
    result = await paginate(
        db[ATHLETES], query, pagination,
        sort=[("created_at", -1)],
        projection={"user": 1, "organization": 1, "created_at": 1},
    )
    await attach_accounts(db, result["documents"])
    return result


async def get_athlete(db, athlete_id, scope: ScopeFilter) -> dict:
    query = await scope_query(db, Resource.ATHLETE, scope, {"_id": athlete_id})
    athlete = await db[ATHLETES].find_one(query)
    if not athlete:
        raise missing(scope, "Athlete")
    return athlete


async def view(db, athlete_id, scope: ScopeFilter) -> dict:
    athlete = await get_athlete(db, athlete_id, scope)
    (athlete,) = await attach_accounts(db, [athlete])
    athlete["teams"] = await db[TEAMS].find(
        {"athletes": {"$in": [athlete["_id"]]}}, {"name": 1}
    ).to_list(length=None)
    return athlete


async def edit_account(db, athlete_id, scope: ScopeFilter, name: str, email: str, author) -> dict:
    athlete = await get_athlete(db, athlete_id, scope)
    await update_account(db, athlete["user"], name, email)
    await log_interaction(db, athlete["_id"], author, "edit", "Account updated")
    return athlete


async def edit_data(db, athlete_id, scope: ScopeFilter, birth_date: date, height: float,
                    weight: float, author) -> dict:
    athlete = await get_athlete(db, athlete_id, scope)
    changes = {
        "birth_date": as_datetime(birth_date),
        "height": float(height),
        "weight": float(weight),
        "updated_at": _utcnow(),
    }
    await db[ATHLETES].update_one({"_id": athlete["_id"]}, {"$set": changes})
    athlete.update(changes)
    await log_interaction(db, athlete["_id"], author, "edit", "Data updated")
    return athlete


async def delete_athlete(db, athlete_id, scope: ScopeFilter, author) -> dict:
    athlete = await get_athlete(db, athlete_id, scope)
    (athlete,) = await attach_accounts(db, [athlete])
    await db[TEAMS].update_many({"athletes": athlete["_id"]}, {"$pull": {"athletes": athlete["_id"]}})
    await db[TESTINGS].delete_many({"athlete": athlete["_id"]})
    await db[ATHLETES].delete_one({"_id": athlete["_id"]})
    await delete_account(db, athlete["user"])
    await log_interaction(db, athlete["organization"], author, "delete", "Athlete deleted", athlete.get("name"))
    return athlete
