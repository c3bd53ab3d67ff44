# teamhub/routes/testing.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from teamhub.access.dependencies import require_access
from teamhub.access.identity import Identity
from teamhub.access.permissions import Action, Resource
from teamhub.access.scope import ScopeFilter
from teamhub.auth import get_current_identity
from teamhub.db import get_db, testings
from teamhub.routes.common import optional_object_id
from teamhub.schemas.testing import NewTesting
from teamhub.utils.ids import require_object_id, stringify
from teamhub.utils.pagination import Pagination, pagination_params

router = APIRouter(prefix="/api/testing", tags=["testing"])


async def _athlete_of_path_testing(request: Request, db):
    return await testings.athlete_of_testing(db, request.path_params.get("testing_id"))


@router.post("/v1/create")
async def create_testing(
    body: NewTesting,
    athlete: str = Query(...),
    scope: ScopeFilter = Depends(require_access(Resource.TESTING, Action.CREATE, target="athlete")),
    identity: Identity = Depends(get_current_identity),
    db=Depends(get_db),
):
    testing = await testings.create_testing(
        db, require_object_id(athlete), scope, body.date, body.data, require_object_id(identity.id),
    )
    return {"testing_id": str(testing["_id"]), "athlete_id": str(testing["athlete"])}


@router.get("/v1/listing")
async def listing(
    athlete: Optional[str] = Query(None),
    pagination: Pagination = Depends(pagination_params),
    scope: ScopeFilter = Depends(require_access(Resource.TESTING, Action.READ_ALL, target="athlete")),
    db=Depends(get_db),
):
    return stringify(await testings.listing(db, pagination, scope, athlete=optional_object_id(athlete)))


@router.delete("/v1/{testing_id}/delete")
async def delete(
    testing_id: str,
    scope: ScopeFilter = Depends(require_access(
        Resource.TESTING, Action.DELETE, target_loader=_athlete_of_path_testing,
    )),
    identity: Identity = Depends(get_current_identity),
    db=Depends(get_db),
):
    testing = await testings.delete_testing(db, require_object_id(testing_id), scope, require_object_id(identity.id))
    return {"testing_id": str(testing["_id"]), "athlete_id": str(testing["athlete"])}
