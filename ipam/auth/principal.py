"""Verified identity attached to an authenticated request."""

from dataclasses import dataclass, field
from typing import Any

from fastapi import Request


@dataclass(frozen=True)
class Principal:
    issuer: str
    subject: str
    audience: str | list[str] | None = None
    claims: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "Principal":
        return cls(
            issuer=_string_claim(claims, "iss"),
            subject=_string_claim(claims, "sub"),
            audience=claims.get("aud"),
            claims=dict(claims),
        )


def _string_claim(claims: dict[str, Any], key: str) -> str:
    value = claims.get(key)
    return value if isinstance(value, str) else ""


def get_principal(request: Request) -> Principal | None:
    """FastAPI dependency returning the Principal set by the authentication gate.

    None when authentication is disabled or the path is public.
    """
    return getattr(request.state, "principal", None)
