# teamhub/db/scoping.py
"""
Turns a ScopeFilter into a Mongo match for one collection.

Every listing, view, edit and delete goes through scope_query, so a granted
scope always narrows the query; there is no code path that skips it.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from teamhub.access.permissions import Resource
from teamhub.access.scope import ScopeFilter
from teamhub.db import TEAMS

# matches nothing: used when a scope has no meaning for a collection
_NOTHING = {"_id": {"$in": []}}


async def athletes_of_trainer(db, trainer_id) -> List[Any]:
    ids = set()
    async for team in db[TEAMS].find({"trainers": {"$in": [trainer_id]}}, {"athletes": 1}):
        ids.update(team.get("athletes") or [])
    return list(ids)


async def scope_query(
    db,
    resource: Resource,
    scope: Optional[ScopeFilter],
    base: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Combine `base` with the scope's condition for `resource`.
    Callers may not override the scope through `base`.
    """
    conditions = [dict(base)] if base else []

    if scope is not None and not scope.unrestricted:
        conditions.append(await _condition(db, resource, scope))

    if not conditions:
        return {}
    if len(conditions) == 1:
        return conditions[0]
    return {"$and": conditions}


async def _condition(db, resource: Resource, scope: ScopeFilter) -> Dict[str, Any]:
    resource = Resource(resource)

    if scope.organization is not None:
        if resource is Resource.ORGANIZATION:
            return {"_id": scope.organization}
        return {"organization": scope.organization}

    if scope.trainer is not None:
        if resource is Resource.TEAM:
            return {"trainers": {"$in": [scope.trainer]}}
        if resource is Resource.ATHLETE:
            return {"_id": {"$in": await athletes_of_trainer(db, scope.trainer)}}
        if resource is Resource.TESTING:
            return {"athlete": {"$in": await athletes_of_trainer(db, scope.trainer)}}
        return _NOTHING

    if scope.athlete is not None:
        if resource is Resource.ATHLETE:
            return {"_id": scope.athlete}
        if resource is Resource.TESTING:
            return {"athlete": scope.athlete}
        return _NOTHING

    return {}
