# teamhub/access/resolvers.py
"""
Ownership resolvers.

One plain async function per (resource type, role). Each answers a single
question: which slice of `resource` may this identity touch, and, when a
concrete instance is targeted, is that instance inside the slice?

    resolver(identity, target_id, lookups) -> Resolution

A (resource, role) pair with no entry in RESOLVERS resolves to DENIED.
Instance checks only run when target_id is given; listings get the broad
filter and nothing else.
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

from teamhub.access.identity import Identity
from teamhub.access.lookups import OwnershipLookups
from teamhub.access.permissions import Resource, Role
from teamhub.access.scope import DENIED, Resolution, ScopeFilter, denied, granted

Resolver = Callable[[Identity, Optional[Any], OwnershipLookups], Awaitable[Resolution]]


async def admin_access(identity: Identity, target_id, lookups: OwnershipLookups) -> Resolution:
    return granted()


def _organization_access(belongs: str) -> Resolver:
    """
    Organization role: scope to the caller's own organization, and veto a
    targeted instance whose `organization` is any other.
    `belongs` names the lookup answering "does <instance> belong to <org>".
    """

    async def resolve(identity: Identity, target_id, lookups: OwnershipLookups) -> Resolution:
        organization_id = await lookups.organization_owned_by(identity.id)
        if organization_id is None:
            return DENIED
        scope = ScopeFilter(organization=organization_id)
        if target_id is not None:
            check = getattr(lookups, belongs)
            if not await check(target_id, organization_id):
                return denied(scope)
        return granted(scope)

    resolve.__name__ = f"organization_access_via_{belongs}"
    return resolve


async def trainer_team_access(identity: Identity, target_id, lookups: OwnershipLookups) -> Resolution:
    trainer_id = await lookups.trainer_owned_by(identity.id)
    if trainer_id is None:
        return DENIED
    scope = ScopeFilter(trainer=trainer_id)
    if target_id is not None and not await lookups.team_has_trainer(target_id, trainer_id):
        return denied(scope)
    return granted(scope)


async def trainer_athlete_access(identity: Identity, target_id, lookups: OwnershipLookups) -> Resolution:
    # trainers only reach athletes through a team they both belong to
    trainer_id = await lookups.trainer_owned_by(identity.id)
    if trainer_id is None:
        return DENIED
    scope = ScopeFilter(trainer=trainer_id)
    if target_id is not None and not await lookups.trainer_shares_team_with_athlete(trainer_id, target_id):
        return denied(scope)
    return granted(scope)


async def athlete_self_access(identity: Identity, target_id, lookups: OwnershipLookups) -> Resolution:
    athlete_id = await lookups.athlete_owned_by(identity.id)
    if athlete_id is None:
        return DENIED
    scope = ScopeFilter(athlete=athlete_id)
    if target_id is not None and str(target_id) != str(athlete_id):
        return denied(scope)
    return granted(scope)


RESOLVERS: Dict[Tuple[Resource, Role], Resolver] = {
    (Resource.ORGANIZATION, Role.ADMIN): admin_access,

    (Resource.TEAM, Role.ADMIN): admin_access,
    (Resource.TEAM, Role.ORGANIZATION): _organization_access("team_belongs_to_organization"),
    (Resource.TEAM, Role.TRAINER): trainer_team_access,

    (Resource.TRAINER, Role.ADMIN): admin_access,
    (Resource.TRAINER, Role.ORGANIZATION): _organization_access("trainer_belongs_to_organization"),

    (Resource.ATHLETE, Role.ADMIN): admin_access,
    (Resource.ATHLETE, Role.ORGANIZATION): _organization_access("athlete_belongs_to_organization"),
    (Resource.ATHLETE, Role.TRAINER): trainer_athlete_access,
    (Resource.ATHLETE, Role.ATHLETE): athlete_self_access,

    # testings are reached through their athlete; target_id is the athlete id
    (Resource.TESTING, Role.ADMIN): admin_access,
    (Resource.TESTING, Role.ORGANIZATION): _organization_access("athlete_belongs_to_organization"),
    (Resource.TESTING, Role.TRAINER): trainer_athlete_access,
    (Resource.TESTING, Role.ATHLETE): athlete_self_access,
}


def resolver_for(resource: Resource, role: str) -> Optional[Resolver]:
    try:
        return RESOLVERS.get((Resource(resource), Role(role)))
    except ValueError:
        return None


async def resolve(
    identity: Identity,
    resource: Resource,
    lookups: OwnershipLookups,
    target_id: Optional[Any] = None,
) -> Resolution:
    resolver = resolver_for(resource, identity.role)
    if resolver is None:
        return DENIED
    return await resolver(identity, target_id, lookups)
