# teamhub/access/lookups.py
from __future__ import annotations

from typing import Any, Optional, Protocol


class OwnershipLookups(Protocol):
    """
    Read-only existence/membership checks used by the ownership resolvers.
    Ids are passed as received; implementations must treat ids they cannot
    parse as "no such record".
    """

    async def organization_owned_by(self, user_id: Any) -> Optional[Any]: ...

    async def trainer_owned_by(self, user_id: Any) -> Optional[Any]: ...

    async def athlete_owned_by(self, user_id: Any) -> Optional[Any]: ...

    async def athlete_belongs_to_organization(self, athlete_id: Any, organization_id: Any) -> bool: ...

    async def team_belongs_to_organization(self, team_id: Any, organization_id: Any) -> bool: ...

    async def trainer_belongs_to_organization(self, trainer_id: Any, organization_id: Any) -> bool: ...

    async def team_has_trainer(self, team_id: Any, trainer_id: Any) -> bool: ...

    async def trainer_shares_team_with_athlete(self, trainer_id: Any, athlete_id: Any) -> bool: ...
