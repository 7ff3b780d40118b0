"""
Credential store: persistence for user records.

Emails are stored normalized (stripped, lower-cased), so the
``users.email`` unique constraint makes uniqueness case-insensitive.  That
constraint is what decides a registration race; the lookup done before
inserting only saves a round trip in the common case.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import undefer

from database.helpers import normalize_email, pick_fields, to_uuid
from database.models import User
from utils.errors import DuplicateEmail, ValidationError

logger = logging.getLogger(__name__)

USER_PATCH_FIELDS = ("name", "email", "password_hash")


async def find_by_email(
    session: AsyncSession,
    email: str,
    include_hash: bool = False,
) -> Optional[User]:
    """
    Look a user up by email.

    The password hash is left unloaded unless ``include_hash`` is set;
    only credential checks should ask for it.
    """
    stmt = select(User).where(User.email == normalize_email(email))
    if include_hash:
        stmt = stmt.options(undefer(User.password_hash))
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def find_by_id(session: AsyncSession, user_id: str) -> Optional[User]:
    return await session.get(User, to_uuid(user_id))


async def list_users(session: AsyncSession) -> List[User]:
    result = await session.execute(select(User).order_by(User.created_at.asc()))
    return list(result.scalars().all())


async def _flush_or_duplicate(session: AsyncSession, email: str) -> None:
    try:
        await session.flush()
    except IntegrityError:
        await session.rollback()
        logger.info("Rejected duplicate email %s", email)
        raise DuplicateEmail()


async def create_user(
    session: AsyncSession,
    name: str | None,
    email: str,
    password_hash: str,
) -> User:
    """Insert a user; raises ``DuplicateEmail`` if the email is taken."""
    email = normalize_email(email)
    if await find_by_email(session, email) is not None:
        raise DuplicateEmail()

    user = User(name=name, email=email, password_hash=password_hash)
    session.add(user)
    await _flush_or_duplicate(session, email)
    return user


async def update_by_id(
    session: AsyncSession,
    user_id: str,
    patch: Dict[str, Any],
) -> Optional[User]:
    """Apply ``patch`` (name / email / password_hash) and return the user."""
    user = await find_by_id(session, user_id)
    if user is None:
        return None

    fields = pick_fields(patch, USER_PATCH_FIELDS)
    if "email" in fields:
        fields["email"] = normalize_email(fields["email"])
        if not fields["email"]:
            raise ValidationError("email cannot be blank")
    for key, value in fields.items():
        setattr(user, key, value)
    user.updated_at = datetime.now(timezone.utc)
    await _flush_or_duplicate(session, user.email)
    return user


async def delete_by_id(session: AsyncSession, user_id: str) -> Optional[User]:
    user = await find_by_id(session, user_id)
    if user is None:
        return None
    await session.delete(user)
    await session.flush()
    return user
