# teamhub/db/ownership.py
from __future__ import annotations

from typing import Any, Optional

from bson import ObjectId

from teamhub.db import ATHLETES, ORGANIZATIONS, TEAMS, TRAINERS
from teamhub.utils.ids import parse_object_id


class MongoOwnershipLookups:
    """
    Read-only ownership checks backing the access resolvers.
    Only `_id` projections are fetched; nothing here writes.
    """

    def __init__(self, db) -> None:
        self._db = db

    async def _owned_by(self, collection: str, user_id: Any) -> Optional[ObjectId]:
        uid = parse_object_id(user_id)
        if uid is None:
            return None
        doc = await self._db[collection].find_one({"user": uid}, {"_id": 1})
        return doc["_id"] if doc else None

    async def _exists(self, collection: str, query: dict) -> bool:
        return await self._db[collection].find_one(query, {"_id": 1}) is not None

    async def organization_owned_by(self, user_id: Any) -> Optional[ObjectId]:
        return await self._owned_by(ORGANIZATIONS, user_id)

    async def trainer_owned_by(self, user_id: Any) -> Optional[ObjectId]:
        return await self._owned_by(TRAINERS, user_id)

    async def athlete_owned_by(self, user_id: Any) -> Optional[ObjectId]:
        return await self._owned_by(ATHLETES, user_id)

    async def _belongs(self, collection: str, instance_id: Any, organization_id: Any) -> bool:
        oid, org = parse_object_id(instance_id), parse_object_id(organization_id)
        if oid is None or org is None:
            return False
        return await self._exists(collection, {"_id": oid, "organization": org})

    async def athlete_belongs_to_organization(self, athlete_id: Any, organization_id: Any) -> bool:
        return await self._belongs(ATHLETES, athlete_id, organization_id)

    async def team_belongs_to_organization(self, team_id: Any, organization_id: Any) -> bool:
        return await self._belongs(TEAMS, team_id, organization_id)

    async def trainer_belongs_to_organization(self, trainer_id: Any, organization_id: Any) -> bool:
        return await self._belongs(TRAINERS, trainer_id, organization_id)

    async def team_has_trainer(self, team_id: Any, trainer_id: Any) -> bool:
        tid, trid = parse_object_id(team_id), parse_object_id(trainer_id)
        if tid is None or trid is None:
            return False
        return await self._exists(TEAMS, {"_id": tid, "trainers": {"$in": [trid]}})

    async def trainer_shares_team_with_athlete(self, trainer_id: Any, athlete_id: Any) -> bool:
        trid, aid = parse_object_id(trainer_id), parse_object_id(athlete_id)
        if trid is None or aid is None:
            return False
        return await self._exists(TEAMS, {"trainers": {"$in": [trid]}, "athletes": {"$in": [aid]}})
