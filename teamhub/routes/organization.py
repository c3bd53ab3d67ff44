# teamhub/routes/organization.py
from fastapi import APIRouter, Depends, Query

from teamhub.access.dependencies import require_access
from teamhub.access.identity import Identity
from teamhub.access.permissions import Action, Resource
from teamhub.access.scope import ScopeFilter
from teamhub.auth import get_current_identity
from teamhub.db import get_db, organizations
from teamhub.db.interactions import list_interactions
from teamhub.schemas.accounts import AccountEdit
from teamhub.schemas.organization import Limits, LockEdit, OrganizationCreate
from teamhub.utils.ids import require_object_id, stringify
from teamhub.utils.pagination import Pagination, pagination_params

router = APIRouter(prefix="/api/organization", tags=["organization"])


def _access(*actions, target="organization_id"):
    return Depends(require_access(Resource.ORGANIZATION, *actions, target=target))


@router.post("/v1/create")
async def create_organization(
    body: OrganizationCreate,
    scope: ScopeFilter = _access(Action.CREATE, target=None),
    identity: Identity = Depends(get_current_identity),
    db=Depends(get_db),
):
    org, password = await organizations.create_organization(
        db, body.name, body.email, require_object_id(identity.id),
        limits=body.model_dump(include={"teams_limit", "trainers_limit", "athletes_limit", "testings_limit"}),
    )
    return {"organization_id": str(org["_id"]), "temporary_password": password}


@router.get("/v1/listing")
async def listing(
    search: str = Query("", max_length=64),
    pagination: Pagination = Depends(pagination_params),
    scope: ScopeFilter = _access(Action.READ_ALL, target=None),
    db=Depends(get_db),
):
    return stringify(await organizations.listing(db, pagination, scope, search))


@router.get("/v1/{organization_id}/view")
async def view(organization_id: str, scope: ScopeFilter = _access(Action.READ), db=Depends(get_db)):
    return stringify(await organizations.view(db, require_object_id(organization_id), scope))


@router.put("/v1/{organization_id}/edit-account")
async def edit_account(
    organization_id: str,
    body: AccountEdit,
    scope: ScopeFilter = _access(Action.EDIT),
    identity: Identity = Depends(get_current_identity),
    db=Depends(get_db),
):
    org = await organizations.edit_account(
        db, require_object_id(organization_id), scope, body.name, body.email, require_object_id(identity.id),
    )
    return {"organization_id": str(org["_id"])}


@router.put("/v1/{organization_id}/edit-lock")
async def edit_lock(
    organization_id: str,
    body: LockEdit,
    scope: ScopeFilter = _access(Action.EDIT),
    identity: Identity = Depends(get_current_identity),
    db=Depends(get_db),
):
    org = await organizations.edit_lock(
        db, require_object_id(organization_id), scope, body.locked, require_object_id(identity.id),
    )
    return {"organization_id": str(org["_id"]), "locked": body.locked}


@router.put("/v1/{organization_id}/edit-limits")
async def edit_limits(
    organization_id: str,
    body: Limits,
    scope: ScopeFilter = _access(Action.EDIT),
    identity: Identity = Depends(get_current_identity),
    db=Depends(get_db),
):
    org = await organizations.edit_limits(
        db, require_object_id(organization_id), scope, body.model_dump(), require_object_id(identity.id),
    )
    return stringify({k: org.get(k) for k in ("_id",) + organizations.LIMIT_FIELDS})


@router.get("/v1/{organization_id}/interactions")
async def interactions(
    organization_id: str,
    pagination: Pagination = Depends(pagination_params),
    scope: ScopeFilter = _access(Action.READ),
    db=Depends(get_db),
):
    org = await organizations.get_organization(db, require_object_id(organization_id), scope)
    return stringify(await list_interactions(db, org["_id"], pagination))
