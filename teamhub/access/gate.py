# teamhub/access/gate.py
from __future__ import annotations

from typing import Iterable, Optional

from teamhub.access.identity import Identity
from teamhub.access.permissions import PERMISSIONS, Action, PermissionMatrix, Resource, permitted_actions


def check_action(
    identity: Optional[Identity],
    resource: Resource,
    required: Iterable,
    matrix: PermissionMatrix = PERMISSIONS,
) -> bool:
    """
    True when the caller's role may perform every action in `required` on
    `resource`. A missing identity is never allowed.
    """
    if identity is None:
        return False
    allowed = permitted_actions(identity.role, resource, matrix)
    return all(Action(action) in allowed for action in required)