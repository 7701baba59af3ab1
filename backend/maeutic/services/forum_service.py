"""Forum Service — forums, posts, comments and likes.

Invariants:
    - Only the author or an admin (user_type == 1) edits or deletes a post/comment
    - A like toggle never creates a second like row for the same (user, target)
    - Category "General" lists every post; any other category must name a forum title
    - Creating a post or comment bumps the forum/post last_activity
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from maeutic.core.errors import (
    InvalidOperationError, PermissionDeniedError, ResourceNotFoundError,
)
from maeutic.models.forum import Comment, CommentLike, Forum, Post, PostLike
from maeutic.models.user import User

logger = logging.getLogger(__name__)

GENERAL_CATEGORY = "General"


class ForumService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def forums(self) -> list[Forum]:
        result = await self.db.execute(select(Forum).order_by(Forum.id))
        return list(result.scalars().all())

    async def _get_forum(self, forum_id: int) -> Forum:
        forum = await self.db.get(Forum, forum_id)
        if not forum:
            raise ResourceNotFoundError("Forum", str(forum_id))
        return forum

    async def posts_in_category(self, category: str) -> list[Post]:
        query = select(Post).order_by(Post.creation_date.desc(), Post.id.desc())
        if category != GENERAL_CATEGORY:
            result = await self.db.execute(select(Forum).where(Forum.title == category))
            forum = result.scalars().first()
            if not forum:
                raise ResourceNotFoundError("Forum", category)
            query = query.where(Post.forum_id == forum.id)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_post(self, post_id: int) -> Post:
        post = await self.db.get(Post, post_id)
        if not post:
            raise ResourceNotFoundError("Post", str(post_id))
        return post

    async def create_post(
        self, user: User, forum_id: int, name: str, description: str,
        parent_id: int | None = None,
    ) -> Post:
        name, description = name.strip(), description.strip()
        if not name or not description:
            raise InvalidOperationError("Post name and description are required")
        forum = await self._get_forum(forum_id)
        if parent_id is not None:
            await self.get_post(parent_id)

        now = datetime.now(timezone.utc)
        post = Post(
            name=name,
            description=description,
            user=user,
            forum=forum,
            parent_post_id=parent_id,
            is_reply=parent_id is not None,
            creation_date=now,
            last_activity=now,
            likes=[],
            comments=[],
        )
        forum.last_activity = now
        self.db.add(post)
        await self.db.commit()
        logger.info(f"Post {post.id} created in forum {forum.id}", extra={"user_id": user.id})
        return post

    async def update_post(
        self, user: User, post_id: int, name: str | None, description: str | None,
    ) -> Post:
        post = await self.get_post(post_id)
        if not user.can_manage(post.user_id):
            raise PermissionDeniedError("Access denied")
        if name is not None and name.strip():
            post.name = name.strip()
        if description is not None and description.strip():
            post.description = description.strip()
        post.last_activity = datetime.now(timezone.utc)
        await self.db.commit()
        return post

    async def delete_post(self, user: User, post_id: int) -> None:
        post = await self.get_post(post_id)
        if not user.can_manage(post.user_id):
            raise PermissionDeniedError("Access denied")
        await self.db.delete(post)
        await self.db.commit()
        logger.info(f"Post {post_id} deleted", extra={"user_id": user.id})

    # --- likes ---

    def _post_like(self, post: Post, user: User) -> PostLike | None:
        return next((like for like in post.likes if like.user_id == user.id), None)

    async def toggle_post_like(self, user: User, post_id: int) -> tuple[bool, int]:
        """Returns (liked, likes_count) after the toggle."""
        post = await self.get_post(post_id)
        existing = self._post_like(post, user)
        if existing:
            post.likes.remove(existing)
            liked = False
        else:
            post.likes.append(PostLike(user_id=user.id))
            liked = True
        await self.db.commit()
        return liked, len(post.likes)

    async def unlike_post(self, user: User, post_id: int) -> int:
        post = await self.get_post(post_id)
        existing = self._post_like(post, user)
        if existing:
            post.likes.remove(existing)
            await self.db.commit()
        return len(post.likes)

    # --- comments ---

    async def comments(self, post_id: int) -> list[Comment]:
        await self.get_post(post_id)
        result = await self.db.execute(
            select(Comment)
            .where(Comment.post_id == post_id)
            .order_by(Comment.creation_date.desc(), Comment.id.desc())
        )
        return list(result.scalars().all())

    async def _get_comment(self, comment_id: int) -> Comment:
        comment = await self.db.get(Comment, comment_id)
        if not comment:
            raise ResourceNotFoundError("Comment", str(comment_id))
        return comment

    async def add_comment(self, user: User, post_id: int, body: str) -> Comment:
        body = body.strip()
        if not body:
            raise InvalidOperationError("Comment is empty")
        post = await self.get_post(post_id)
        now = datetime.now(timezone.utc)
        comment = Comment(body=body, user=user, creation_date=now, likes=[])
        post.comments.append(comment)
        post.last_activity = now
        await self.db.commit()
        return comment

    async def update_comment(self, user: User, comment_id: int, body: str) -> Comment:
        comment = await self._get_comment(comment_id)
        if not user.can_manage(comment.user_id):
            raise PermissionDeniedError("Access denied")
        body = body.strip()
        if not body:
            raise InvalidOperationError("Comment is empty")
        comment.body = body
        await self.db.commit()
        return comment

    async def delete_comment(self, user: User, comment_id: int) -> None:
        comment = await self._get_comment(comment_id)
        if not user.can_manage(comment.user_id):
            raise PermissionDeniedError("Access denied")
        await self.db.delete(comment)
        await self.db.commit()

    async def toggle_comment_like(self, user: User, comment_id: int) -> tuple[bool, int]:
        comment = await self._get_comment(comment_id)
        existing = next((like for like in comment.likes if like.user_id == user.id), None)
        if existing:
            comment.likes.remove(existing)
            liked = False
        else:
            comment.likes.append(CommentLike(user_id=user.id))
            liked = True
        await self.db.commit()
        return liked, len(comment.likes)
