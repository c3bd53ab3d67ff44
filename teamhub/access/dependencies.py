# teamhub/access/dependencies.py
from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional

from fastapi import Depends, Request

from teamhub.access.decision import evaluate_access
from teamhub.access.identity import Identity
from teamhub.access.permissions import PERMISSIONS, Action, PermissionMatrix, Resource
from teamhub.access.scope import ScopeFilter
from teamhub.auth import get_current_identity
from teamhub.db import get_db
from teamhub.db.ownership import MongoOwnershipLookups

TargetLoader = Callable[[Request, Any], Awaitable[Any]]


def get_permissions(request: Request) -> PermissionMatrix:
    return getattr(request.app.state, "permissions", PERMISSIONS)


def require_access(
    resource: Resource,
    *actions: Action,
    target: Optional[str] = None,
    target_loader: Optional[TargetLoader] = None,
) -> Callable:
    """
    Usage:
        @router.get("/v1/{athlete_id}/view")
        async def view(scope: ScopeFilter = Depends(
            require_access(Resource.ATHLETE, Action.READ, target="athlete_id"))):
            ...

    `target` names the path (or query) parameter carrying the targeted
    instance id. `target_loader(request, db)` is used instead when the id has
    to be read from the database. The dependency returns the ScopeFilter the
    handler must apply, or raises 401/403.
    """

    async def _dep(
        request: Request,
        identity: Identity = Depends(get_current_identity),
        db=Depends(get_db),
    ) -> ScopeFilter:
        target_id = None
        if target:
            target_id = request.path_params.get(target) or request.query_params.get(target) or None

        loader = None
        if target_loader is not None:
            async def loader():
                return await target_loader(request, db)

        decision = await evaluate_access(
            identity,
            resource,
            actions,
            MongoOwnershipLookups(db),
            target_id=target_id,
            matrix=get_permissions(request),
            target_loader=loader,
        )
        return decision.grant()

    return _dep
