"""Forum Routes — forums, posts and post likes.

Invariants:
    - GET /api/forums/General lists every post; unknown categories are 404
    - Edits and deletes need the author or an admin (403 otherwise)
    - Like endpoints always report the resulting likesCount
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from maeutic.api.deps import get_current_user, get_optional_user
from maeutic.api.presenters import forum_payload, post_payload
from maeutic.infrastructure.database import get_db
from maeutic.models.user import User
from maeutic.schemas.content import PostCreate, PostUpdate
from maeutic.services.forum_service import ForumService

router = APIRouter(prefix="/api/forums", tags=["forums"])


@router.get("")
async def list_forums(db: AsyncSession = Depends(get_db)):
    return {"forums": [forum_payload(f) for f in await ForumService(db).forums()]}


@router.post("/post", status_code=status.HTTP_201_CREATED)
async def create_post(
    body: PostCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    post = await ForumService(db).create_post(
        user, body.forum_id, body.name, body.description, body.parent_id,
    )
    return {"success": True, "post": post_payload(post, user)}


@router.get("/post/{post_id}")
async def get_post(
    post_id: int,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    return {"post": post_payload(await ForumService(db).get_post(post_id), user)}


@router.put("/post/{post_id}")
async def update_post(
    post_id: int,
    body: PostUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    post = await ForumService(db).update_post(user, post_id, body.name, body.description)
    return {"success": True, "post": post_payload(post, user)}


@router.delete("/post/{post_id}")
async def delete_post(
    post_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await ForumService(db).delete_post(user, post_id)
    return {"success": True}


@router.post("/post/{post_id}/like")
async def like_post(
    post_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    liked, count = await ForumService(db).toggle_post_like(user, post_id)
    return {"success": True, "liked": liked, "likesCount": count}


@router.delete("/post/{post_id}/like")
async def unlike_post(
    post_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    count = await ForumService(db).unlike_post(user, post_id)
    return {"success": True, "liked": False, "likesCount": count}


@router.get("/{category}")
async def posts_in_category(
    category: str,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    posts = await ForumService(db).posts_in_category(category)
    return {"category": category, "posts": [post_payload(p, user) for p in posts]}
