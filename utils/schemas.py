"""
Pydantic schemas for the users / posts / comments API.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


# ═══════════════════════════════════════════════════════════════════════════════
# Users
# ═══════════════════════════════════════════════════════════════════════════════


class UserOut(BaseModel):
    """Public view of a user.  There is deliberately no password field."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: Optional[str] = None
    email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    pswd: Optional[str] = None


class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    pswd: Optional[str] = None


class AuthorOut(BaseModel):
    """Author fields expanded into posts and comments."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: Optional[str] = None
    email: str


# ═══════════════════════════════════════════════════════════════════════════════
# Posts
# ═══════════════════════════════════════════════════════════════════════════════


class PostCreate(BaseModel):
    # No author field: the author always comes from the verified token.
    title: Optional[str] = None
    body: Optional[str] = None
    image: Optional[str] = None


class PostUpdate(BaseModel):
    title: Optional[str] = None
    body: Optional[str] = None
    image: Optional[str] = None


class PostOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    body: Optional[str] = None
    image: Optional[str] = None
    author_id: uuid.UUID
    author: Optional[AuthorOut] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ═══════════════════════════════════════════════════════════════════════════════
# Comments
# ═══════════════════════════════════════════════════════════════════════════════


class CommentCreate(BaseModel):
    body: Optional[str] = None


class CommentUpdate(BaseModel):
    body: Optional[str] = None


class CommentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    body: str
    post_id: uuid.UUID
    author_id: uuid.UUID
    author: Optional[AuthorOut] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
