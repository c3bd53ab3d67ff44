# teamhub/routes/common.py
from typing import Optional

from teamhub.access.scope import ScopeFilter
from teamhub.errors import BadRequest, Forbidden
from teamhub.utils.ids import parse_object_id, require_object_id


def organization_for_create(scope: ScopeFilter, organization: Optional[str]):
    """
    Organization a new record is created under.
    Organization accounts always create inside their own organization; an
    unrestricted caller (admin) must name one with ?organization=.
    """
    if scope.organization is not None:
        return scope.organization
    if not scope.unrestricted:
        raise Forbidden()
    if not organization:
        raise BadRequest()
    return require_object_id(organization)


def optional_object_id(value: Optional[str]):
    if value in (None, ""):
        return None
    oid = parse_object_id(value)
    if oid is None:
        raise BadRequest()
    return oid
