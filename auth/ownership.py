"""
Ownership check for mutating a user-owned record.
"""

from __future__ import annotations

import logging
from typing import Any

from auth.models import Identity
from database.helpers import canonical_id
from utils.errors import Forbidden

logger = logging.getLogger(__name__)


def is_owner(owner_id: Any, identity: Identity) -> bool:
    """Exact id equality after both sides are put in canonical UUID form."""
    owner = canonical_id(owner_id)
    caller = canonical_id(identity.user_id)
    return owner is not None and owner == caller


def ensure_owner(owner_id: Any, identity: Identity) -> None:
    if not is_owner(owner_id, identity):
        logger.info("Ownership denied: user %s on record owned by %s", identity.user_id, owner_id)
        raise Forbidden("not the owner of this resource")
