# teamhub/db/teams.py
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from teamhub.access.permissions import Resource
from teamhub.access.scope import ScopeFilter
from teamhub.db import ATHLETES, TEAMS, TRAINERS
from teamhub.db.accounts import attach_accounts, search_condition
from teamhub.db.organizations import has_capacity
from teamhub.db.scoping import scope_query
from teamhub.errors import BadRequest, LimitReached, missing
from teamhub.utils.ids import require_object_id
from teamhub.utils.logger import log_interaction
from teamhub.utils.pagination import Pagination, paginate


def _utcnow():
    return datetime.now(timezone.utc)


async def create_team(db, organization_id, name: str, description: str, author) -> dict:
    if not await has_capacity(db, organization_id, "teams_limit"):
        raise LimitReached("Team")
    doc = {
        "organization": organization_id,
        "name": name.strip(),
        "description": (description or "").strip(),
        "trainers": [],
        "athletes": [],
        "created_at": _utcnow(),
        "updated_at": _utcnow(),
    }
    result = await db[TEAMS].insert_one(doc)
    doc["_id"] = result.inserted_id
    await log_interaction(db, organization_id, author, "create", "Team created", doc["name"])
    await log_interaction(db, doc["_id"], author, "create", "Team created")
    return doc


async def listing(
    db,
    pagination: Pagination,
    scope: ScopeFilter,
    search: str = "",
    organization=None,
    trainer=None,
) -> dict:
    base = {}
    if search.strip():
        base["name"] = {"$regex": re.escape(search.strip()), "$options": "i"}
    if organization is not None:
        base["organization"] = organization
    if trainer is not None:
        base["trainers"] = {"$in": [trainer]}
    query = await scope_query(db, Resource.TEAM, scope, base)
    result = await paginate(
        db[TEAMS], query, pagination,
        sort=[("name", 1)],
        projection={"name": 1, "description": 1, "organization": 1, "trainers": 1, "athletes": 1, "created_at": 1},
    )
    for team in result["documents"]:
        team["trainers_count"] = len(team.pop("trainers", None) or [])
        team["athletes_count"] = len(team.pop("athletes", None) or [])
    return result


async def get_team(db, team_id, scope: ScopeFilter) -> dict:
    query = await scope_query(db, Resource.TEAM, scope, {"_id": team_id})
    team = await db[TEAMS].find_one(query)
    if not team:
        raise missing(scope, "Team")
    return team


async def _members(db, collection: str, ids: List) -> List[dict]:
    if not ids:
        return []
    docs = await db[collection].find({"_id": {"$in": ids}}, {"user": 1}).to_list(length=None)
    await attach_accounts(db, docs)
    return [{"_id": d["_id"], "name": d["name"], "email": d["email"]} for d in docs]


async def view(db, team_id, scope: ScopeFilter) -> dict:
    team = await get_team(db, team_id, scope)
    team["trainers"] = await _members(db, TRAINERS, team.get("trainers") or [])
    team["athletes"] = await _members(db, ATHLETES, team.get("athletes") or [])
    return team


async def edit_team(db, team_id, scope: ScopeFilter, name: str, description: str, author) -> dict:
    team = await get_team(db, team_id, scope)
    changes = {"name": name.strip(), "description": (description or "").strip(), "updated_at": _utcnow()}
    await db[TEAMS].update_one({"_id": team["_id"]}, {"$set": changes})
    team.update(changes)
    await log_interaction(db, team["_id"], author, "edit", "Team updated")
    return team


async def _validated_members(db, collection: str, raw_ids: Iterable, organization_id) -> List:
    # deduplicated, order kept; every member must belong to the team's organization
    ids = []
    for raw in raw_ids or []:
        oid = require_object_id(raw)
        if oid not in ids:
            ids.append(oid)
    if not ids:
        return ids
    found = await db[collection].count_documents({"_id": {"$in": ids}, "organization": organization_id})
    if found != len(ids):
        raise BadRequest("Members do not belong to the team's organization")
    return ids


async def edit_members(
    db,
    team_id,
    scope: ScopeFilter,
    author,
    trainers: Optional[Iterable] = None,
    athletes: Optional[Iterable] = None,
) -> dict:
    """
    Replace the team's member sets. A set passed as None is left unchanged.
    Returns the team and the ids removed from each set.
    """
    team = await get_team(db, team_id, scope)
    changes, removed = {}, {"trainers": [], "athletes": []}

    if trainers is not None:
        new = await _validated_members(db, TRAINERS, trainers, team["organization"])
        removed["trainers"] = [t for t in team.get("trainers") or [] if t not in new]
        changes["trainers"] = new
    if athletes is not None:
        new = await _validated_members(db, ATHLETES, athletes, team["organization"])
        removed["athletes"] = [a for a in team.get("athletes") or [] if a not in new]
        changes["athletes"] = new

    if changes:
        changes["updated_at"] = _utcnow()
        await db[TEAMS].update_one({"_id": team["_id"]}, {"$set": changes})
        team.update(changes)
        await log_interaction(db, team["_id"], author, "edit", "Members updated")
    return {"team": team, "removed": removed}


async def delete_team(db, team_id, scope: ScopeFilter, author) -> dict:
    team = await get_team(db, team_id, scope)
    await db[TEAMS].delete_one({"_id": team["_id"]})
    await log_interaction(db, team["organization"], author, "delete", "Team deleted", team.get("name"))
    return team


async def _candidates(db, collection: str, team: dict, field: str, search: str, pagination: Pagination) -> dict:
    """
    Members the team could hold: every record of the team's organization in
    `collection`, sorted by account name. `selected` are the current members
    among the matches.
    """
    query = {"organization": team["organization"]}
    query.update(await search_condition(db, search))
    docs = await db[collection].find(query, {"user": 1}).to_list(length=None)
    await attach_accounts(db, docs)
    docs.sort(key=lambda d: ((d.get("name") or "").lower(), str(d["_id"])))

    rows = [{"_id": d["_id"], "name": d["name"], "email": d["email"]} for d in docs]
    members = set(team.get(field) or [])
    return {
        "documents": rows[pagination.skip:pagination.skip + pagination.limit],
        "selected": [r for r in rows if r["_id"] in members],
        "total": len(rows),
    }


async def manage_trainers_listing(db, team_id, scope: ScopeFilter, pagination: Pagination, search: str = "") -> dict:
    team = await get_team(db, team_id, scope)
    return await _candidates(db, TRAINERS, team, "trainers", search, pagination)


async def manage_athletes_listing(db, team_id, scope: ScopeFilter, pagination: Pagination, search: str = "") -> dict:
    team = await get_team(db, team_id, scope)
    return await _candidates(db, ATHLETES, team, "athletes", search, pagination)
