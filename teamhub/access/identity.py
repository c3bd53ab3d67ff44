# teamhub/access/identity.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, built from a verified access token."""
    id: str
    role: str
    name: Optional[str] = None
    email: Optional[str] = None

    @staticmethod
    def from_claims(claims: dict) -> "Identity":
        return Identity(
            id=str(claims["sub"]),
            role=str(claims.get("role") or ""),
            name=claims.get("name"),
            email=claims.get("email"),
        )

    def to_dict(self) -> dict:
        return {"user_id": self.id, "role": self.role, "name": self.name, "email": self.email}
