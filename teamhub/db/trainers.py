# teamhub/db/trainers.py
from __future__ import annotations

from datetime import datetime, timezone

from teamhub.access.permissions import Resource, Role
from teamhub.access.scope import ScopeFilter
from teamhub.db import TEAMS, TRAINERS
from teamhub.db.accounts import attach_accounts, create_account, delete_account, search_condition, update_account
from teamhub.db.organizations import has_capacity
from teamhub.db.scoping import scope_query
from teamhub.errors import LimitReached, missing
from teamhub.utils.logger import log_interaction
from teamhub.utils.pagination import Pagination, paginate


def _utcnow():
    return datetime.now(timezone.utc)


async def create_trainer(db, organization_id, name: str, email: str, author):
    if not await has_capacity(db, organization_id, "trainers_limit"):
        raise LimitReached("Trainer")
    user, password = await create_account(db, name, email, Role.TRAINER.value)
    doc = {
        "user": user["_id"],
        "organization": organization_id,
        "created_at": _utcnow(),
        "updated_at": _utcnow(),
    }
    result = await db[TRAINERS].insert_one(doc)
    doc["_id"] = result.inserted_id
    await log_interaction(db, organization_id, author, "create", "Trainer created", user["name"])
    await log_interaction(db, doc["_id"], author, "create", "Trainer created")
    return doc, password


async def listing(db, pagination: Pagination, scope: ScopeFilter, search: str = "", organization=None) -> dict:
    base = await search_condition(db, search)
    if organization is not None:
        base["organization"] = organization
    query = await scope_query(db, Resource.TRAINER, scope, base)
    result = await paginate(db[TRAINERS], query, pagination, sort=[("created_at", -1)])
    await attach_accounts(db, result["documents"])
    return result


async def get_trainer(db, trainer_id, scope: ScopeFilter) -> dict:
    query = await scope_query(db, Resource.TRAINER, scope, {"_id": trainer_id})
    trainer = await db[TRAINERS].find_one(query)
    if not trainer:
        raise missing(scope, "Trainer")
    return trainer


async def view(db, trainer_id, scope: ScopeFilter) -> dict:
    trainer = await get_trainer(db, trainer_id, scope)
    (trainer,) = await attach_accounts(db, [trainer])
    trainer["teams"] = await db[TEAMS].find(
        {"trainers": {"$in": [trainer["_id"]]}}, {"name": 1}
    ).to_list(length=None)
    return trainer


async def edit_account(db, trainer_id, scope: ScopeFilter, name: str, email: str, author) -> dict:
    trainer = await get_trainer(db, trainer_id, scope)
    await update_account(db, trainer["user"], name, email)
    await log_interaction(db, trainer["_id"], author, "edit", "Account updated")
    return trainer


async def delete_trainer(db, trainer_id, scope: ScopeFilter, author) -> dict:
    trainer = await get_trainer(db, trainer_id, scope)
    (trainer,) = await attach_accounts(db, [trainer])
    await db[TEAMS].update_many({"trainers": trainer["_id"]}, {"$pull": {"trainers": trainer["_id"]}})
    await db[TRAINERS].delete_one({"_id": trainer["_id"]})
    await delete_account(db, trainer["user"])
    await log_interaction(db, trainer["organization"], author, "delete", "Trainer deleted", trainer.get("name"))
    return trainer
