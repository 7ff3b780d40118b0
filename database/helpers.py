"""
Identifier and field normalization shared by the store modules.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, Iterable

from utils.errors import NotFound


def to_uuid(value: str | uuid.UUID) -> uuid.UUID:
    """
    Parse an identifier coming from a path or a token.

    Malformed ids cannot name any record, so they surface as ``NotFound``.
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        raise NotFound(f"no record with id {value!r}")


def canonical_id(value: Any) -> str | None:
    """Canonical string form of an id, or ``None`` if it is not one."""
    if value is None:
        return None
    if isinstance(value, uuid.UUID):
        return str(value)
    try:
        return str(uuid.UUID(str(value).strip()))
    except (ValueError, TypeError, AttributeError):
        return None


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def pick_fields(patch: Dict[str, Any], allowed: Iterable[str]) -> Dict[str, Any]:
    """Keep only the patchable fields that were actually supplied."""
    return {k: v for k, v in patch.items() if k in allowed and v is not None}
