"""Forum ORM — discussion categories, their posts, comments and likes.

Invariants:
    - Every Post belongs to one Forum and one author
    - A user likes a given post or comment at most once (unique constraint)
    - Deleting a post deletes its likes and comments (replies via FK cascade)

Design Decisions:
    - Post, PostLike, Comment and CommentLike share this file: they are only
      ever used together (ADR: max 3-4 files to understand a feature)
    - likes/comments loaded with selectin so counts never lazy-load in async context
"""

from datetime import datetime, timezone

from sqlalchemy import (
    String, Text, Integer, Boolean, DateTime, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from maeutic.db.base import Base


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Forum(Base):
    __tablename__ = "forums"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")
    anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    special: Mapped[str] = mapped_column(String(255), nullable=False, default="general")
    last_activity: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )


class Post(Base):
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    forum_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("forums.id", ondelete="CASCADE"), nullable=False,
    )
    parent_post_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=True,
    )
    is_reply: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    creation_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )
    last_activity: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )

    user: Mapped["User"] = relationship("User", lazy="selectin")
    forum: Mapped["Forum"] = relationship("Forum", lazy="selectin")
    likes: Mapped[list["PostLike"]] = relationship(
        "PostLike", back_populates="post",
        cascade="all, delete-orphan", lazy="selectin",
    )
    comments: Mapped[list["Comment"]] = relationship(
        "Comment", back_populates="post",
        cascade="all, delete-orphan", lazy="selectin",
    )


class PostLike(Base):
    __tablename__ = "post_likes"
    __table_args__ = (UniqueConstraint("user_id", "post_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )

    post: Mapped["Post"] = relationship("Post", back_populates="likes")


class Comment(Base):
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True,
    )
    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False,
    )
    creation_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )

    user: Mapped["User | None"] = relationship("User", lazy="selectin")
    post: Mapped["Post"] = relationship(
        "Post", back_populates="comments", lazy="selectin",
    )
    likes: Mapped[list["CommentLike"]] = relationship(
        "CommentLike", cascade="all, delete-orphan", lazy="selectin",
    )


class CommentLike(Base):
    __tablename__ = "comment_likes"
    __table_args__ = (UniqueConstraint("user_id", "comment_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    comment_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("comments.id", ondelete="CASCADE"), nullable=False,
    )
