from teamhub.access.decision import AccessDecision, evaluate_access
from teamhub.access.gate import check_action
from teamhub.access.identity import Identity
from teamhub.access.permissions import PERMISSIONS, Action, Resource, Role, build_matrix, permitted_actions
from teamhub.access.resolvers import RESOLVERS, resolve
from teamhub.access.scope import Resolution, ScopeFilter

__all__ = [
    "AccessDecision",
    "Action",
    "Identity",
    "PERMISSIONS",
    "RESOLVERS",
    "Resolution",
    "Resource",
    "Role",
    "ScopeFilter",
    "build_matrix",
    "check_action",
    "evaluate_access",
    "permitted_actions",
    "resolve",
]
