"""
User routes.

Reads and creation are public.  Update and delete require a token and are
limited to the caller's own account.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, require_identity
from auth.models import Identity
from auth.ownership import ensure_owner
from auth.password import hash_password_async
from auth.routes import register_user
from database import users as user_store
from utils.errors import NotFound, ValidationError
from utils.schemas import UserCreate, UserOut, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserOut)
async def create_user(
    req: UserCreate,
    session: AsyncSession = Depends(db_session),
):
    return await register_user(session, req.name, req.email, req.pswd)


@router.get("", response_model=List[UserOut])
async def list_users(session: AsyncSession = Depends(db_session)):
    return await user_store.list_users(session)


@router.get("/{user_id}", response_model=UserOut)
async def get_user(user_id: str, session: AsyncSession = Depends(db_session)):
    user = await user_store.find_by_id(session, user_id)
    if user is None:
        raise NotFound("user not found")
    return user


@router.patch("/{user_id}", response_model=UserOut)
async def update_user(
    user_id: str,
    req: UserUpdate,
    session: AsyncSession = Depends(db_session),
    identity: Identity = Depends(require_identity),
):
    """Update name / email / password of the caller's own account."""
    if req.email is not None and not req.email.strip():
        raise ValidationError("email cannot be blank")
    if await user_store.find_by_id(session, user_id) is None:
        raise NotFound("user not found")
    ensure_owner(user_id, identity)

    patch: Dict[str, Any] = {"name": req.name, "email": req.email}
    if req.pswd:
        patch["password_hash"] = await hash_password_async(req.pswd)
    user = await user_store.update_by_id(session, user_id, patch)
    logger.info("Updated user %s", user.id)
    return user


@router.delete("/{user_id}", response_model=UserOut)
async def delete_user(
    user_id: str,
    session: AsyncSession = Depends(db_session),
    identity: Identity = Depends(require_identity),
):
    if await user_store.find_by_id(session, user_id) is None:
        raise NotFound("user not found")
    ensure_owner(user_id, identity)

    user = await user_store.delete_by_id(session, user_id)
    logger.info("Deleted user %s", user.id)
    return user
