"""Comment Routes — comments on posts and comment likes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from maeutic.api.deps import get_current_user, get_optional_user
from maeutic.api.presenters import comment_payload
from maeutic.infrastructure.database import get_db
from maeutic.models.user import User
from maeutic.schemas.content import CommentBody
from maeutic.services.forum_service import ForumService

router = APIRouter(prefix="/api", tags=["comments"])


@router.get("/post/{post_id}/comments")
async def list_comments(
    post_id: int,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    comments = await ForumService(db).comments(post_id)
    return {"comments": [comment_payload(c, user) for c in comments]}


@router.post("/post/{post_id}/comment", status_code=status.HTTP_201_CREATED)
async def add_comment(
    post_id: int,
    body: CommentBody,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    comment = await ForumService(db).add_comment(user, post_id, body.body)
    return {"success": True, "comment": comment_payload(comment, user)}


@router.put("/comment/{comment_id}")
async def update_comment(
    comment_id: int,
    body: CommentBody,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    comment = await ForumService(db).update_comment(user, comment_id, body.body)
    return {"success": True, "comment": comment_payload(comment, user)}


@router.delete("/comment/{comment_id}")
async def delete_comment(
    comment_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await ForumService(db).delete_comment(user, comment_id)
    return {"success": True}


@router.post("/comment/{comment_id}/like")
async def like_comment(
    comment_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    liked, count = await ForumService(db).toggle_comment_like(user, comment_id)
    return {"success": True, "liked": liked, "likesCount": count}
