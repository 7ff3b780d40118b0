"""
Post routes.

Listing and reading are public; create / update / delete need a token, and
update / delete are limited to the post's author.
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, require_identity
from auth.models import Identity
from auth.ownership import ensure_owner
from database import posts as post_store
from utils.errors import NotFound, ValidationError
from utils.schemas import PostCreate, PostOut, PostUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])


async def _load_post(session: AsyncSession, post_id: str):
    post = await post_store.get_post(session, post_id)
    if post is None:
        raise NotFound("post not found")
    return post


@router.get("", response_model=List[PostOut])
async def list_posts(session: AsyncSession = Depends(db_session)):
    """All posts, newest first, with author details expanded."""
    return await post_store.list_posts(session)


@router.get("/{post_id}", response_model=PostOut)
async def get_post(post_id: str, session: AsyncSession = Depends(db_session)):
    return await _load_post(session, post_id)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=PostOut)
async def create_post(
    req: PostCreate,
    session: AsyncSession = Depends(db_session),
    identity: Identity = Depends(require_identity),
):
    if not req.title or not req.title.strip():
        raise ValidationError("title required")
    post = await post_store.create_post(
        session,
        author_id=identity.user_id,
        title=req.title,
        body=req.body,
        image=req.image,
    )
    logger.info("User %s created post %s", identity.user_id, post.id)
    return post


@router.patch("/{post_id}", response_model=PostOut)
async def update_post(
    post_id: str,
    req: PostUpdate,
    session: AsyncSession = Depends(db_session),
    identity: Identity = Depends(require_identity),
):
    if req.title is not None and not req.title.strip():
        raise ValidationError("title cannot be blank")
    post = await _load_post(session, post_id)
    ensure_owner(post.author_id, identity)
    return await post_store.update_post(session, post, req.model_dump(exclude_unset=True))


@router.delete("/{post_id}", response_model=PostOut)
async def delete_post(
    post_id: str,
    session: AsyncSession = Depends(db_session),
    identity: Identity = Depends(require_identity),
):
    post = await _load_post(session, post_id)
    ensure_owner(post.author_id, identity)
    post = await post_store.delete_post(session, post)
    logger.info("User %s deleted post %s", identity.user_id, post.id)
    return post
