# teamhub/routes/trainer.py
from typing import Optional

from fastapi import APIRouter, Depends, Query

from teamhub.access.dependencies import require_access
from teamhub.access.identity import Identity
from teamhub.access.permissions import Action, Resource
from teamhub.access.scope import ScopeFilter
from teamhub.auth import get_current_identity
from teamhub.db import get_db, trainers
from teamhub.db.interactions import list_interactions
from teamhub.routes.common import optional_object_id, organization_for_create
from teamhub.schemas.accounts import AccountCreate, AccountEdit
from teamhub.utils.ids import require_object_id, stringify
from teamhub.utils.pagination import Pagination, pagination_params

router = APIRouter(prefix="/api/trainer", tags=["trainer"])


def _access(*actions, target="trainer_id"):
    return Depends(require_access(Resource.TRAINER, *actions, target=target))


@router.post("/v1/create")
async def create_trainer(
    body: AccountCreate,
    organization: Optional[str] = Query(None),
    scope: ScopeFilter = _access(Action.CREATE, target=None),
    identity: Identity = Depends(get_current_identity),
    db=Depends(get_db),
):
    organization_id = organization_for_create(scope, organization)
    trainer, password = await trainers.create_trainer(
        db, organization_id, body.name, body.email, require_object_id(identity.id),
    )
    return {
        "trainer_id": str(trainer["_id"]),
        "organization_id": str(trainer["organization"]),
        "temporary_password": password,
    }


@router.get("/v1/listing")
async def listing(
    search: str = Query("", max_length=64),
    organization: Optional[str] = Query(None),
    pagination: Pagination = Depends(pagination_params),
    scope: ScopeFilter = _access(Action.READ_ALL, target=None),
    db=Depends(get_db),
):
    return stringify(await trainers.listing(
        db, pagination, scope, search, organization=optional_object_id(organization),
    ))


@router.get("/v1/{trainer_id}/view")
async def view(trainer_id: str, scope: ScopeFilter = _access(Action.READ), db=Depends(get_db)):
    return stringify(await trainers.view(db, require_object_id(trainer_id), scope))


@router.put("/v1/{trainer_id}/edit-account")
async def edit_account(
    trainer_id: str,
    body: AccountEdit,
    scope: ScopeFilter = _access(Action.EDIT),
    identity: Identity = Depends(get_current_identity),
    db=Depends(get_db),
):
    trainer = await trainers.edit_account(
        db, require_object_id(trainer_id), scope, body.name, body.email, require_object_id(identity.id),
    )
    return {"trainer_id": str(trainer["_id"]), "organization_id": str(trainer["organization"])}


@router.delete("/v1/{trainer_id}/delete")
async def delete(
    trainer_id: str,
    scope: ScopeFilter = _access(Action.DELETE),
    identity: Identity = Depends(get_current_identity),
    db=Depends(get_db),
):
    trainer = await trainers.delete_trainer(db, require_object_id(trainer_id), scope, require_object_id(identity.id))
    return {"trainer_id": str(trainer["_id"]), "organization_id": str(trainer["organization"])}


@router.get("/v1/{trainer_id}/interactions")
async def interactions(
    trainer_id: str,
    pagination: Pagination = Depends(pagination_params),
    scope: ScopeFilter = _access(Action.READ),
    db=Depends(get_db),
):
    trainer = await trainers.get_trainer(db, require_object_id(trainer_id), scope)
    return stringify(await list_interactions(db, trainer["_id"], pagination))
