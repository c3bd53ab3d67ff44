# teamhub/routes/athlete.py
from typing import Optional

from fastapi import APIRouter, Depends, Query

from teamhub.access.dependencies import require_access
from teamhub.access.identity import Identity
from teamhub.access.permissions import Action, Resource
from teamhub.access.scope import ScopeFilter
from teamhub.auth import get_current_identity
from teamhub.db import athletes, get_db
from teamhub.db.interactions import list_interactions
from teamhub.routes.common import optional_object_id, organization_for_create
from teamhub.schemas.accounts import AccountEdit
from teamhub.schemas.athlete import AthleteCreate, AthleteData
from teamhub.utils.ids import require_object_id, stringify
from teamhub.utils.pagination import Pagination, pagination_params

router = APIRouter(prefix="/api/athlete", tags=["athlete"])


def _access(*actions, target="athlete_id"):
    return Depends(require_access(Resource.ATHLETE, *actions, target=target))


def _ids(athlete: dict) -> dict:
    return {"athlete_id": str(athlete["_id"]), "organization_id": str(athlete["organization"])}


@router.post("/v1/create")
async def create_athlete(
    body: AthleteCreate,
    organization: Optional[str] = Query(None),
    scope: ScopeFilter = _access(Action.CREATE, target=None),
    identity: Identity = Depends(get_current_identity),
    db=Depends(get_db),
):
    organization_id = organization_for_create(scope, organization)
    athlete, password = await athletes.create_athlete(
        db, organization_id, body.name, body.email, body.birth_date, body.height, body.weight,
        require_object_id(identity.id),
    )
    return {**_ids(athlete), "temporary_password": password}


@router.get("/v1/listing")
async def listing(
    search: str = Query("", max_length=64),
    organization: Optional[str] = Query(None),
    team: Optional[str] = Query(None),
    trainer: Optional[str] = Query(None),
    pagination: Pagination = Depends(pagination_params),
    scope: ScopeFilter = _access(Action.READ_ALL, target=None),
    db=Depends(get_db),
):
    return stringify(await athletes.listing(
        db, pagination, scope, search,
        organization=optional_object_id(organization),
        team=optional_object_id(team),
        trainer=optional_object_id(trainer),
    ))


@router.get("/v1/{athlete_id}/view")
async def view(athlete_id: str, scope: ScopeFilter = _access(Action.READ), db=Depends(get_db)):
    return stringify(await athletes.view(db, require_object_id(athlete_id), scope))


@router.put("/v1/{athlete_id}/edit-account")
async def edit_account(
    athlete_id: str,
    body: AccountEdit,
    scope: ScopeFilter = _access(Action.EDIT),
    identity: Identity = Depends(get_current_identity),
    db=Depends(get_db),
):
    athlete = await athletes.edit_account(
        db, require_object_id(athlete_id), scope, body.name, body.email, require_object_id(identity.id),
    )
    return _ids(athlete)


@router.put("/v1/{athlete_id}/edit-data")
async def edit_data(
    athlete_id: str,
    body: AthleteData,
    scope: ScopeFilter = _access(Action.EDIT),
    identity: Identity = Depends(get_current_identity),
    db=Depends(get_db),
):
    athlete = await athletes.edit_data(
        db, require_object_id(athlete_id), scope, body.birth_date, body.height, body.weight,
        require_object_id(identity.id),
    )
    return _ids(athlete)


@router.delete("/v1/{athlete_id}/delete")
async def delete(
    athlete_id: str,
    scope: ScopeFilter = _access(Action.DELETE),
    identity: Identity = Depends(get_current_identity),
    db=Depends(get_db),
):
    athlete = await athletes.delete_athlete(db, require_object_id(athlete_id), scope, require_object_id(identity.id))
    return _ids(athlete)


@router.get("/v1/{athlete_id}/interactions")
async def interactions(
    athlete_id: str,
    pagination: Pagination = Depends(pagination_params),
    scope: ScopeFilter = _access(Action.READ),
    db=Depends(get_db),
):
    athlete = await athletes.get_athlete(db, require_object_id(athlete_id), scope)
    return stringify(await list_interactions(db, athlete["_id"], pagination))
