"""
JWT-style token creation and verification.

Tokens are base64url-encoded JSON claims signed with HMAC-SHA256:
``<base64url(claims)>.<hex signature>``.

The signing key is ``config.jwt_secret`` (env var: ``JWT_SECRET``).  Keys
listed in ``JWT_PREVIOUS_SECRETS`` are still accepted for verification so
a key can be rotated without logging everybody out.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Iterable, Optional

from auth.models import TokenClaims
from config.settings import config
from utils.errors import InternalError, InvalidTokenError


def _sign(raw: bytes, secret: str) -> str:
    return hmac.new(secret.encode(), raw, hashlib.sha256).hexdigest()


def create_token(
    user_id: str,
    email: str,
    ttl_seconds: Optional[int] = None,
    *,
    secret: Optional[str] = None,
    now: Optional[float] = None,
) -> str:
    """
    Create a signed token for ``user_id`` / ``email``.

    ``ttl_seconds`` defaults to ``config.jwt_expiry_seconds``.
    """
    secret = secret or config.jwt_secret
    if not secret:
        raise InternalError("JWT_SECRET is not configured")
    ttl = config.jwt_expiry_seconds if ttl_seconds is None else ttl_seconds

    issued_at = time.time() if now is None else float(now)
    payload = {
        "user_id": str(user_id),
        "email": email,
        "iat": issued_at,
        "exp": issued_at + ttl,
    }
    raw = json.dumps(payload, separators=(",", ":"), sort_keys=True).encode()
    return urlsafe_b64encode(raw).decode() + "." + _sign(raw, secret)


def verify_token(
    token: str,
    *,
    secrets: Optional[Iterable[str]] = None,
    now: Optional[float] = None,
) -> TokenClaims:
    """
    Verify ``token`` and return its claims.

    Raises ``InvalidTokenError`` if the token is malformed, was signed with
    an unknown key, or ``now >= exp``.
    """
    keys = [k for k in (secrets if secrets is not None else config.verification_secrets()) if k]
    if not keys:
        raise InternalError("JWT_SECRET is not configured")

    try:
        encoded, sig = token.split(".", 1)
        raw = urlsafe_b64decode(encoded.encode("ascii"))
        if not any(hmac.compare_digest(sig, _sign(raw, key)) for key in keys):
            raise InvalidTokenError("bad signature")
        claims = TokenClaims.model_validate(json.loads(raw))
    except InvalidTokenError:
        raise
    except (ValueError, TypeError, AttributeError) as exc:
        raise InvalidTokenError("malformed token") from exc

    current = time.time() if now is None else now
    if current >= claims.exp:
        raise InvalidTokenError("token expired")
    return claims
