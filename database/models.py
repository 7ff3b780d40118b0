"""
SQLAlchemy ORM models for users, posts and comments.

References between records are plain columns, not foreign keys: the
store does not enforce them, and deleting a user leaves their posts and
comments in place.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text, Uuid
from sqlalchemy.orm import DeclarativeBase, deferred, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(128))
    email = Column(String(255), unique=True, nullable=False)
    # Only loaded when a query asks for it with ``undefer``.
    password_hash = deferred(Column(String(255), nullable=False))
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


class Post(Base):
    __tablename__ = "posts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    body = Column(Text)
    image = Column(String(1024))
    author_id = Column(Uuid, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    author = relationship(
        "User", primaryjoin="foreign(Post.author_id) == User.id", lazy="raise",
        viewonly=True,
    )


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    body = Column(Text, nullable=False)
    author_id = Column(Uuid, nullable=False, index=True)
    post_id = Column(Uuid, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    author = relationship(
        "User", primaryjoin="foreign(Comment.author_id) == User.id", lazy="raise",
        viewonly=True,
    )
    post = relationship(
        "Post", primaryjoin="foreign(Comment.post_id) == Post.id", lazy="raise",
        viewonly=True,
    )
