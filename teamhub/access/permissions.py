# teamhub/access/permissions.py
"""
Static permission matrix: role -> resource type -> allowed actions.

The matrix is built once and frozen. The app receives it at construction
(`create_app(permissions=...)`) so tests can hand in an alternate table.
"""
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping


class Role(str, Enum):
    ADMIN = "admin"
    ORGANIZATION = "organization"
    TRAINER = "trainer"
    ATHLETE = "athlete"


class Resource(str, Enum):
    ORGANIZATION = "organization"
    TEAM = "team"
    TRAINER = "trainer"
    ATHLETE = "athlete"
    TESTING = "testing"


class Action(str, Enum):
    CREATE = "create"
    READ = "read"
    READ_ALL = "read-all"
    EDIT = "edit"
    DELETE = "delete"


PermissionMatrix = Mapping[Role, Mapping[Resource, frozenset]]

_ALL = (Action.CREATE, Action.READ, Action.READ_ALL, Action.EDIT, Action.DELETE)
_NONE: tuple = ()


def build_matrix(table: Mapping[Role, Mapping[Resource, Iterable[Action]]]) -> PermissionMatrix:
    """
    Freeze a role/resource table. Every role must define every resource
    (an empty iterable is fine), otherwise ValueError.
    """
    frozen = {}
    for role in Role:
        if role not in table:
            raise ValueError(f"permission matrix has no entry for role {role.value!r}")
        row = table[role]
        missing = [r.value for r in Resource if r not in row]
        if missing:
            raise ValueError(f"role {role.value!r} is missing resources: {', '.join(missing)}")
        frozen[role] = MappingProxyType({r: frozenset(Action(a) for a in row[r]) for r in Resource})
    return MappingProxyType(frozen)


PERMISSIONS: PermissionMatrix = build_matrix({
    Role.ADMIN: {
        Resource.ORGANIZATION: _ALL,
        Resource.TEAM: _ALL,
        Resource.TRAINER: _ALL,
        Resource.ATHLETE: _ALL,
        Resource.TESTING: _ALL,
    },
    Role.ORGANIZATION: {
        Resource.ORGANIZATION: _NONE,
        Resource.TEAM: _ALL,
        Resource.TRAINER: _ALL,
        Resource.ATHLETE: _ALL,
        Resource.TESTING: _ALL,
    },
    Role.TRAINER: {
        Resource.ORGANIZATION: _NONE,
        Resource.TEAM: (Action.READ, Action.READ_ALL),
        Resource.TRAINER: _NONE,
        Resource.ATHLETE: (Action.READ, Action.READ_ALL, Action.EDIT),
        Resource.TESTING: _ALL,
    },
    Role.ATHLETE: {
        Resource.ORGANIZATION: _NONE,
        Resource.TEAM: _NONE,
        Resource.TRAINER: _NONE,
        Resource.ATHLETE: _NONE,
        Resource.TESTING: (Action.READ, Action.READ_ALL),
    },
})


def permitted_actions(role, resource, matrix: PermissionMatrix = PERMISSIONS) -> frozenset:
    """Allowed actions for role on resource. Unknown roles get an empty set."""
    try:
        role = Role(role)
    except ValueError:
        return frozenset()
    return matrix[role][Resource(resource)]
