# teamhub/db/testings.py
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Dict

from teamhub.access.permissions import Resource
from teamhub.access.scope import ScopeFilter
from teamhub.db import TESTINGS
from teamhub.db.athletes import as_datetime, get_athlete
from teamhub.db.organizations import has_capacity
from teamhub.db.scoping import scope_query
from teamhub.errors import LimitReached, missing
from teamhub.utils.ids import parse_object_id
from teamhub.utils.logger import log_interaction
from teamhub.utils.pagination import Pagination, paginate


def _utcnow():
    return datetime.now(timezone.utc)


async def athlete_of_testing(db, testing_id):
    """Athlete id a testing belongs to, or None when there is no such testing."""
    oid = parse_object_id(testing_id)
    if oid is None:
        return None
    doc = await db[TESTINGS].find_one({"_id": oid}, {"athlete": 1})
    return doc["athlete"] if doc else None


async def create_testing(db, athlete_id, scope: ScopeFilter, tested_on: date,
                         data: Dict[str, float], author) -> dict:
    athlete = await get_athlete(db, athlete_id, scope)
    if not await has_capacity(db, athlete["organization"], "testings_limit"):
        raise LimitReached("Testing")
    doc = {
        "athlete": athlete["_id"],
        "organization": athlete["organization"],
        "date": as_datetime(tested_on),
        "data": {k: float(v) for k, v in data.items()},
        "created_at": _utcnow(),
        "updated_at": _utcnow(),
    }
    result = await db[TESTINGS].insert_one(doc)
    doc["_id"] = result.inserted_id
    await log_interaction(db, athlete["_id"], author, "create", "Testing created", tested_on.isoformat())
    return doc


async def listing(db, pagination: Pagination, scope: ScopeFilter, athlete=None) -> dict:
    base = {"athlete": athlete} if athlete is not None else None
    query = await scope_query(db, Resource.TESTING, scope, base)
    return await paginate(db[TESTINGS], query, pagination, sort=[("date", -1), ("_id", -1)])


async def delete_testing(db, testing_id, scope: ScopeFilter, author) -> dict:
    query = await scope_query(db, Resource.TESTING, scope, {"_id": testing_id})
    testing = await db[TESTINGS].find_one(query)
    if not testing:
        raise missing(scope, "Testing")
    await db[TESTINGS].delete_one({"_id": testing["_id"]})
    await log_interaction(
        db, testing["athlete"], author, "delete", "Testing deleted", testing["date"].date().isoformat(),
    )
    return testing
