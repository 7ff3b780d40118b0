"""
Post persistence.

Reads come back with ``author`` expanded (``selectinload``); ownership is
checked by the caller before ``update_post`` / ``delete_post``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from database.helpers import pick_fields, to_uuid
from database.models import Post

POST_PATCH_FIELDS = ("title", "body", "image")


async def list_posts(session: AsyncSession) -> List[Post]:
    result = await session.execute(
        select(Post)
        .options(selectinload(Post.author))
        .order_by(Post.created_at.desc())
    )
    return list(result.scalars().all())


async def get_post(session: AsyncSession, post_id: str) -> Optional[Post]:
    """Load one post with its author expanded, or ``None``."""
    result = await session.execute(
        select(Post)
        .options(selectinload(Post.author))
        .where(Post.id == to_uuid(post_id))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def create_post(
    session: AsyncSession,
    author_id: str,
    title: str,
    body: str | None = None,
    image: str | None = None,
) -> Post:
    post = Post(author_id=to_uuid(author_id), title=title, body=body, image=image)
    session.add(post)
    await session.flush()
    return await get_post(session, post.id)


async def update_post(session: AsyncSession, post: Post, patch: Dict[str, Any]) -> Post:
    """Apply title / body / image changes.  ``author_id`` is never patchable."""
    for key, value in pick_fields(patch, POST_PATCH_FIELDS).items():
        setattr(post, key, value)
    post.updated_at = datetime.now(timezone.utc)
    await session.flush()
    return await get_post(session, post.id)


async def delete_post(session: AsyncSession, post: Post) -> Post:
    await session.delete(post)
    await session.flush()
    return post
