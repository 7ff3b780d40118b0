"""
Auth API routes — register, login.

Mounted at the application root: ``POST /register``, ``POST /login``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session
from auth.jwt import create_token
from auth.password import hash_password_async, verify_password_async
from database import users as user_store
from utils.errors import Unauthorized, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ── Request / response schemas ─────────────────────────────────────────


class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    pswd: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    pswd: Optional[str] = None


class MessageResponse(BaseModel):
    msg: str


class LoginResponse(BaseModel):
    msg: str
    token: str


# ── Endpoints ──────────────────────────────────────────────────────────


async def register_user(session: AsyncSession, name: Optional[str], email: Optional[str], pswd: Optional[str]):
    """Hash ``pswd`` and store a new user.  Shared with ``POST /users``."""
    if not email or not email.strip() or not pswd:
        raise ValidationError("name/email/password required")

    password_hash = await hash_password_async(pswd)
    user = await user_store.create_user(session, name, email, password_hash)
    logger.info("Registered user %s (%s)", user.email, user.id)
    return user


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
async def register(
    req: RegisterRequest,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Register a new user."""
    await register_user(session, req.name, req.email, req.pswd)
    return {"msg": "user created successfully"}


@router.post("/login", response_model=LoginResponse)
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Login with email + password."""
    if not req.email or not req.pswd:
        raise ValidationError("email/password required")

    user = await user_store.find_by_email(session, req.email, include_hash=True)
    if user is None or not await verify_password_async(req.pswd, user.password_hash):
        logger.info("Failed login for %s", req.email)
        raise Unauthorized("invalid credentials")

    token = create_token(str(user.id), user.email)
    logger.info("Login: %s (%s)", user.email, user.id)
    return {"msg": "login successfully", "token": token}
