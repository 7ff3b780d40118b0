"""
Value types for the auth layer: token claims and the authenticated identity.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class TokenClaims(BaseModel):
    """Decoded, verified token payload.  ``iat`` / ``exp`` are epoch seconds, fractional."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    email: str
    iat: float
    exp: float


class Identity(BaseModel):
    """
    The authenticated caller, as established by the auth gate.

    Lives in ``request.state.identity``; request bodies never carry it.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    email: str

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> "Identity":
        return cls(user_id=claims.user_id, email=claims.email)
