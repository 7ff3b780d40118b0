"""
Comment persistence.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from database.helpers import pick_fields, to_uuid
from database.models import Comment

COMMENT_PATCH_FIELDS = ("body",)


async def list_comments_for_post(session: AsyncSession, post_id: str) -> List[Comment]:
    result = await session.execute(
        select(Comment)
        .options(selectinload(Comment.author))
        .where(Comment.post_id == to_uuid(post_id))
        .order_by(Comment.created_at.asc())
    )
    return list(result.scalars().all())


async def get_comment(session: AsyncSession, comment_id: str) -> Optional[Comment]:
    result = await session.execute(
        select(Comment)
        .options(selectinload(Comment.author))
        .where(Comment.id == to_uuid(comment_id))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def create_comment(
    session: AsyncSession,
    post_id: str,
    author_id: str,
    body: str,
) -> Comment:
    comment = Comment(post_id=to_uuid(post_id), author_id=to_uuid(author_id), body=body)
    session.add(comment)
    await session.flush()
    return await get_comment(session, comment.id)


async def update_comment(
    session: AsyncSession,
    comment: Comment,
    patch: Dict[str, Any],
) -> Comment:
    for key, value in pick_fields(patch, COMMENT_PATCH_FIELDS).items():
        setattr(comment, key, value)
    comment.updated_at = datetime.now(timezone.utc)
    await session.flush()
    return await get_comment(session, comment.id)


async def delete_comment(session: AsyncSession, comment: Comment) -> Comment:
    await session.delete(comment)
    await session.flush()
    return comment
