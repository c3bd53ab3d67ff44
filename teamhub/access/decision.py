# teamhub/access/decision.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Optional

from teamhub.access.gate import check_action
from teamhub.access.identity import Identity
from teamhub.access.lookups import OwnershipLookups
from teamhub.access.permissions import PERMISSIONS, PermissionMatrix, Resource
from teamhub.access.resolvers import resolve
from teamhub.access.scope import Resolution, ScopeFilter
from teamhub.errors import Forbidden, Unauthenticated

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of one request's access evaluation. Never cached or reused."""
    action_allowed: bool
    resolution: Optional[Resolution] = None

    @property
    def allowed(self) -> bool:
        return self.action_allowed and self.resolution is not None and self.resolution.granted

    @property
    def scope(self) -> Optional[ScopeFilter]:
        return self.resolution.scope if self.resolution else None

    def grant(self) -> ScopeFilter:
        """Return the scope to run under, or raise Forbidden."""
        if not self.allowed:
            raise Forbidden()
        return self.scope


async def evaluate_access(
    identity: Optional[Identity],
    resource: Resource,
    actions: Iterable,
    lookups: OwnershipLookups,
    target_id: Optional[Any] = None,
    matrix: PermissionMatrix = PERMISSIONS,
    target_loader: Optional[Callable[[], Awaitable[Any]]] = None,
) -> AccessDecision:
    """
    Role-action gate first; the ownership resolver only runs when the role
    is permitted the actions at all. Lookup errors propagate untouched.

    `target_loader` resolves the targeted instance id lazily (after the gate),
    for targets that need a read to find, e.g. the athlete of a testing.
    """
    if identity is None:
        raise Unauthenticated()

    resource = Resource(resource)
    actions = tuple(actions)
    if not check_action(identity, resource, actions, matrix):
        logger.info(
            "access denied by role: role=%s resource=%s actions=%s",
            identity.role, resource.value, ",".join(str(getattr(a, "value", a)) for a in actions),
        )
        return AccessDecision(action_allowed=False)

    if target_id is None and target_loader is not None:
        target_id = await target_loader()

    resolution = await resolve(identity, resource, lookups, target_id)
    if not resolution.granted:
        logger.info(
            "access denied by scope: role=%s resource=%s target=%s",
            identity.role, resource.value, target_id,
        )
    return AccessDecision(action_allowed=True, resolution=resolution)
