"""
FastAPI dependencies for authentication.

Provides ``db_session`` and the ``require_identity`` auth gate used across
all protected routes.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import verify_token
from auth.models import Identity
from database.session import get_db_session
from utils.errors import InvalidTokenError, Unauthorized

logger = logging.getLogger(__name__)


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def extract_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pull the token out of an ``Authorization`` header value.

    Accepts ``Bearer <token>`` as well as a bare ``<token>`` sent by older
    clients.
    """
    if not authorization:
        return None
    value = authorization.strip()
    scheme, _, rest = value.partition(" ")
    if scheme.lower() == "bearer":
        value = rest.strip()
    return value or None


async def require_identity(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> Identity:
    """
    Verify the caller's token and return the authenticated ``Identity``.

    The identity is also stored on ``request.state.identity``.  It is never
    written into the request body, so client-supplied fields cannot shadow it.
    """
    token = extract_token(authorization)
    if token is None:
        raise Unauthorized("no token")

    try:
        claims = verify_token(token)
    except InvalidTokenError as exc:
        logger.debug("Rejected token on %s %s: %s", request.method, request.url.path, exc)
        raise Unauthorized("invalid token")

    identity = Identity.from_claims(claims)
    request.state.identity = identity
    return identity
