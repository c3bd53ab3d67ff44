# teamhub/routes/team.py
from typing import Optional

from fastapi import APIRouter, Depends, Query

from teamhub.access.dependencies import require_access
from teamhub.access.identity import Identity
from teamhub.access.permissions import Action, Resource
from teamhub.access.scope import ScopeFilter
from teamhub.auth import get_current_identity
from teamhub.db import get_db, teams
from teamhub.db.interactions import list_interactions
from teamhub.routes.common import optional_object_id, organization_for_create
from teamhub.schemas.team import MembersEdit, TeamCreate, TeamEdit
from teamhub.utils.ids import require_object_id, stringify
from teamhub.utils.pagination import Pagination, pagination_params

router = APIRouter(prefix="/api/team", tags=["team"])


def _access(*actions, target="team_id"):
    return Depends(require_access(Resource.TEAM, *actions, target=target))


@router.post("/v1/create")
async def create_team(
    body: TeamCreate,
    organization: Optional[str] = Query(None),
    scope: ScopeFilter = _access(Action.CREATE, target=None),
    identity: Identity = Depends(get_current_identity),
    db=Depends(get_db),
):
    organization_id = organization_for_create(scope, organization)
    team = await teams.create_team(db, organization_id, body.name, body.description, require_object_id(identity.id))
    return {"team_id": str(team["_id"]), "organization_id": str(team["organization"])}


@router.get("/v1/listing")
async def listing(
    search: str = Query("", max_length=64),
    organization: Optional[str] = Query(None),
    trainer: Optional[str] = Query(None),
    pagination: Pagination = Depends(pagination_params),
    scope: ScopeFilter = _access(Action.READ_ALL, target=None),
    db=Depends(get_db),
):
    # narrowing query params only add conditions; the scope is always applied on top
    return stringify(await teams.listing(
        db, pagination, scope, search,
        organization=optional_object_id(organization),
        trainer=optional_object_id(trainer),
    ))


@router.get("/v1/{team_id}/view")
async def view(team_id: str, scope: ScopeFilter = _access(Action.READ), db=Depends(get_db)):
    return stringify(await teams.view(db, require_object_id(team_id), scope))


@router.put("/v1/{team_id}/edit")
async def edit(
    team_id: str,
    body: TeamEdit,
    scope: ScopeFilter = _access(Action.EDIT),
    identity: Identity = Depends(get_current_identity),
    db=Depends(get_db),
):
    team = await teams.edit_team(
        db, require_object_id(team_id), scope, body.name, body.description, require_object_id(identity.id),
    )
    return {"team_id": str(team["_id"]), "organization_id": str(team["organization"])}


@router.put("/v1/{team_id}/edit-members")
async def edit_members(
    team_id: str,
    body: MembersEdit,
    scope: ScopeFilter = _access(Action.EDIT),
    identity: Identity = Depends(get_current_identity),
    db=Depends(get_db),
):
    result = await teams.edit_members(
        db, require_object_id(team_id), scope, require_object_id(identity.id),
        trainers=body.trainers, athletes=body.athletes,
    )
    team = result["team"]
    return stringify({
        "team_id": team["_id"],
        "organization_id": team["organization"],
        "trainers": team.get("trainers") or [],
        "athletes": team.get("athletes") or [],
        "removed": result["removed"],
    })


@router.get("/v1/{team_id}/manage-trainers-listing")
async def manage_trainers_listing(
    team_id: str,
    search: str = Query("", max_length=64),
    pagination: Pagination = Depends(pagination_params),
    scope: ScopeFilter = _access(Action.EDIT),
    db=Depends(get_db),
):
    return stringify(await teams.manage_trainers_listing(db, require_object_id(team_id), scope, pagination, search))


@router.get("/v1/{team_id}/manage-athletes-listing")
async def manage_athletes_listing(
    team_id: str,
    search: str = Query("", max_length=64),
    pagination: Pagination = Depends(pagination_params),
    scope: ScopeFilter = _access(Action.EDIT),
    db=Depends(get_db),
):
    return stringify(await teams.manage_athletes_listing(db, require_object_id(team_id), scope, pagination, search))


@router.delete("/v1/{team_id}/delete")
async def delete(
    team_id: str,
    scope: ScopeFilter = _access(Action.DELETE),
    identity: Identity = Depends(get_current_identity),
    db=Depends(get_db),
):
    team = await teams.delete_team(db, require_object_id(team_id), scope, require_object_id(identity.id))
    return {"team_id": str(team["_id"]), "organization_id": str(team["organization"])}


@router.get("/v1/{team_id}/interactions")
async def interactions(
    team_id: str,
    pagination: Pagination = Depends(pagination_params),
    scope: ScopeFilter = _access(Action.READ),
    db=Depends(get_db),
):
    team = await teams.get_team(db, require_object_id(team_id), scope)
    return stringify(await list_interactions(db, team["_id"], pagination))
