import pytest
from bson import ObjectId

from teamhub.access.identity import Identity
from teamhub.access.permissions import Resource
from teamhub.access.resolvers import RESOLVERS, resolve, resolver_for
from teamhub.access.scope import ScopeFilter
from teamhub.db.ownership import MongoOwnershipLookups


def _as(world, key):
    user = world.users[key]
    return Identity(id=str(user["_id"]), role=user["role"])


@pytest.fixture
def lookups(db):
    return MongoOwnershipLookups(db)


@pytest.mark.asyncio
@pytest.mark.parametrize("resource", list(Resource))
async def test_admin_is_unrestricted_everywhere(async_world, lookups, resource):
    for target in (None, async_world.A3, async_world.T2, ObjectId()):
        resolution = await resolve(_as(async_world, "admin"), resource, lookups, target)
        assert resolution.state == "granted-unrestricted"


@pytest.mark.asyncio
async def test_organization_listing_gets_own_filter(async_world, lookups):
    resolution = await resolve(_as(async_world, "org1"), Resource.ATHLETE, lookups)
    assert resolution.state == "granted-with-filter"
    assert resolution.scope == ScopeFilter(organization=async_world.O1)


@pytest.mark.asyncio
@pytest.mark.parametrize("resource, own, foreign", [
    (Resource.TEAM, "T1", "T2"),
    (Resource.TRAINER, "TR1", "TR3"),
    (Resource.ATHLETE, "A1", "A3"),
    (Resource.TESTING, "A2", "A3"),
])
async def test_organization_is_isolated_from_other_tenants(async_world, lookups, resource, own, foreign):
    org1 = _as(async_world, "org1")

    granted = await resolve(org1, resource, lookups, str(getattr(async_world, own)))
    assert granted.granted

    denied = await resolve(org1, resource, lookups, str(getattr(async_world, foreign)))
    assert not denied.granted


@pytest.mark.asyncio
async def test_organization_viewing_foreign_team_keeps_attempted_filter(async_world, lookups):
    resolution = await resolve(_as(async_world, "org1"), Resource.TEAM, lookups, str(async_world.T2))
    assert resolution.state == "denied"
    assert resolution.scope == ScopeFilter(organization=async_world.O1)


@pytest.mark.asyncio
async def test_organization_without_row_is_denied(async_world, db, lookups):
    await db["organizations"].delete_one({"_id": async_world.O1})
    resolution = await resolve(_as(async_world, "org1"), Resource.TEAM, lookups)
    assert resolution.state == "denied"


@pytest.mark.asyncio
async def test_organization_has_no_branch_for_organizations(async_world, lookups):
    resolution = await resolve(_as(async_world, "org1"), Resource.ORGANIZATION, lookups, str(async_world.O1))
    assert not resolution.granted


@pytest.mark.asyncio
async def test_trainer_reaches_athlete_through_shared_team(async_world, lookups):
    resolution = await resolve(_as(async_world, "tr1"), Resource.ATHLETE, lookups, str(async_world.A1))
    assert resolution.state == "granted-with-filter"
    assert resolution.scope == ScopeFilter(trainer=async_world.TR1)


@pytest.mark.asyncio
async def test_trainer_is_denied_athlete_of_same_organization_without_shared_team(async_world, lookups):
    resolution = await resolve(_as(async_world, "tr1"), Resource.ATHLETE, lookups, str(async_world.A2))
    assert resolution.state == "denied"


@pytest.mark.asyncio
async def test_trainer_without_team_reaches_no_athlete(async_world, lookups):
    for athlete in (async_world.A1, async_world.A2, async_world.A3):
        resolution = await resolve(_as(async_world, "tr2"), Resource.ATHLETE, lookups, str(athlete))
        assert not resolution.granted


@pytest.mark.asyncio
async def test_trainer_team_membership(async_world, lookups):
    tr1 = _as(async_world, "tr1")
    assert (await resolve(tr1, Resource.TEAM, lookups, str(async_world.T1))).granted
    assert not (await resolve(tr1, Resource.TEAM, lookups, str(async_world.T2))).granted


@pytest.mark.asyncio
async def test_trainer_listing_teams_is_filtered_not_denied(async_world, lookups):
    resolution = await resolve(_as(async_world, "tr2"), Resource.TEAM, lookups)
    assert resolution.state == "granted-with-filter"
    assert resolution.scope.trainer == async_world.TR2


@pytest.mark.asyncio
async def test_trainer_gets_nothing_on_trainers(async_world, lookups):
    tr1 = _as(async_world, "tr1")
    assert not (await resolve(tr1, Resource.TRAINER, lookups)).granted
    assert not (await resolve(tr1, Resource.TRAINER, lookups, str(async_world.TR1))).granted


@pytest.mark.asyncio
async def test_trainer_testings_follow_athlete_access(async_world, lookups):
    tr1 = _as(async_world, "tr1")
    assert (await resolve(tr1, Resource.TESTING, lookups, str(async_world.A1))).granted
    assert not (await resolve(tr1, Resource.TESTING, lookups, str(async_world.A2))).granted


@pytest.mark.asyncio
async def test_athlete_reaches_only_itself(async_world, lookups):
    ath1 = _as(async_world, "ath1")

    own = await resolve(ath1, Resource.ATHLETE, lookups, str(async_world.A1))
    assert own.state == "granted-with-filter"
    assert own.scope == ScopeFilter(athlete=async_world.A1)

    other = await resolve(ath1, Resource.ATHLETE, lookups, str(async_world.A2))
    assert other.state == "denied"


@pytest.mark.asyncio
async def test_athlete_target_may_be_object_id_or_string(async_world, lookups):
    ath1 = _as(async_world, "ath1")
    assert (await resolve(ath1, Resource.TESTING, lookups, async_world.A1)).granted
    assert (await resolve(ath1, Resource.TESTING, lookups, str(async_world.A1))).granted


@pytest.mark.asyncio
@pytest.mark.parametrize("resource", [Resource.ORGANIZATION, Resource.TEAM, Resource.TRAINER])
async def test_athlete_has_no_path_to_other_resources(async_world, lookups, resource):
    assert not (await resolve(_as(async_world, "ath1"), resource, lookups)).granted


@pytest.mark.asyncio
async def test_unknown_role_is_denied(async_world, lookups):
    ghost = Identity(id=str(async_world.users["admin"]["_id"]), role="superuser")
    assert resolver_for(Resource.TEAM, "superuser") is None
    assert not (await resolve(ghost, Resource.TEAM, lookups)).granted


@pytest.mark.asyncio
async def test_malformed_target_is_denied(async_world, lookups):
    assert not (await resolve(_as(async_world, "org1"), Resource.ATHLETE, lookups, "not-an-id")).granted
    assert not (await resolve(_as(async_world, "tr1"), Resource.TEAM, lookups, "not-an-id")).granted


@pytest.mark.asyncio
async def test_resolvers_do_not_write(async_world, db, lookups):
    collections = ("users", "organizations", "trainers", "athletes", "teams", "testings")
    before = {name: await db[name].count_documents({}) for name in collections}
    for (resource, role) in RESOLVERS:
        key = {"admin": "admin", "organization": "org1", "trainer": "tr1", "athlete": "ath1"}[role.value]
        await resolve(_as(async_world, key), resource, lookups, str(async_world.A1))
    after = {name: await db[name].count_documents({}) for name in collections}
    assert before == after


class FailingLookups:
    async def organization_owned_by(self, user_id):
        raise ConnectionError("database unavailable")


@pytest.mark.asyncio
async def test_lookup_failure_propagates(async_world):
    with pytest.raises(ConnectionError):
        await resolve(_as(async_world, "org1"), Resource.TEAM, FailingLookups(), str(async_world.T1))
