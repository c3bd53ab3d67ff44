# teamhub/utils/ids.py
from __future__ import annotations

from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId

from teamhub.errors import BadRequest


def parse_object_id(value: Any) -> Optional[ObjectId]:
    """ObjectId for value, or None when it is empty or malformed."""
    if isinstance(value, ObjectId):
        return value
    if not value:
        return None
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def require_object_id(value: Any) -> ObjectId:
    oid = parse_object_id(value)
    if oid is None:
        raise BadRequest()
    return oid


def stringify(value: Any) -> Any:
    """Copy of a Mongo document (or list of them) with ObjectIds rendered as strings."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {k: stringify(v) for k, v in value.items() if k != "password"}
    if isinstance(value, list):
        return [stringify(v) for v in value]
    return value
