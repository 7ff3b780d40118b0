"""
Comment routes, nested under posts for listing and creation.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, require_identity
from auth.models import Identity
from auth.ownership import ensure_owner
from database import comments as comment_store
from database import posts as post_store
from utils.errors import NotFound, ValidationError
from utils.schemas import CommentCreate, CommentOut, CommentUpdate

router = APIRouter(tags=["comments"])


async def _load_comment(session: AsyncSession, comment_id: str):
    comment = await comment_store.get_comment(session, comment_id)
    if comment is None:
        raise NotFound("comment not found")
    return comment


@router.get("/posts/{post_id}/comments", response_model=List[CommentOut])
async def list_comments(post_id: str, session: AsyncSession = Depends(db_session)):
    if await post_store.get_post(session, post_id) is None:
        raise NotFound("post not found")
    return await comment_store.list_comments_for_post(session, post_id)


@router.post(
    "/posts/{post_id}/comments",
    status_code=status.HTTP_201_CREATED,
    response_model=CommentOut,
)
async def create_comment(
    post_id: str,
    req: CommentCreate,
    session: AsyncSession = Depends(db_session),
    identity: Identity = Depends(require_identity),
):
    if not req.body or not req.body.strip():
        raise ValidationError("body required")
    if await post_store.get_post(session, post_id) is None:
        raise NotFound("post not found")
    return await comment_store.create_comment(
        session, post_id=post_id, author_id=identity.user_id, body=req.body,
    )


@router.patch("/comments/{comment_id}", response_model=CommentOut)
async def update_comment(
    comment_id: str,
    req: CommentUpdate,
    session: AsyncSession = Depends(db_session),
    identity: Identity = Depends(require_identity),
):
    if req.body is not None and not req.body.strip():
        raise ValidationError("body cannot be blank")
    comment = await _load_comment(session, comment_id)
    ensure_owner(comment.author_id, identity)
    return await comment_store.update_comment(session, comment, req.model_dump(exclude_unset=True))


@router.delete("/comments/{comment_id}", response_model=CommentOut)
async def delete_comment(
    comment_id: str,
    session: AsyncSession = Depends(db_session),
    identity: Identity = Depends(require_identity),
):
    comment = await _load_comment(session, comment_id)
    ensure_owner(comment.author_id, identity)
    return await comment_store.delete_comment(session, comment)
