# teamhub/access/scope.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ScopeFilter:
    """
    Narrowing condition produced by ownership resolution.
    At most one of the ids is set; none set means unrestricted (admin).
    """
    organization: Optional[Any] = None
    trainer: Optional[Any] = None
    athlete: Optional[Any] = None

    @property
    def unrestricted(self) -> bool:
        return self.organization is None and self.trainer is None and self.athlete is None

    def to_dict(self) -> Dict[str, str]:
        out = {}
        for key in ("organization", "trainer", "athlete"):
            value = getattr(self, key)
            if value is not None:
                out[key] = str(value)
        return out


UNRESTRICTED = ScopeFilter()


@dataclass(frozen=True)
class Resolution:
    """Terminal outcome of one ownership resolution."""
    granted: bool
    scope: Optional[ScopeFilter] = None

    @property
    def state(self) -> str:
        if not self.granted:
            return "denied"
        if self.scope is None or self.scope.unrestricted:
            return "granted-unrestricted"
        return "granted-with-filter"


DENIED = Resolution(granted=False)


def granted(scope: ScopeFilter = UNRESTRICTED) -> Resolution:
    return Resolution(granted=True, scope=scope)


def denied(scope: Optional[ScopeFilter] = None) -> Resolution:
    # a scope may be kept on a denial so callers can see what was attempted
    return Resolution(granted=False, scope=scope)
