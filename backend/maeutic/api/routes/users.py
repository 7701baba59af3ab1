"""Profile Routes — public profiles, profile activity and self-service account edits.

Invariants:
    - Profile reads are public; unknown usernames are 404
    - PUT and DELETE /api/profile act on the signed-in user only
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from maeutic.api.deps import get_current_user
from maeutic.api.presenters import user_comment_entry, user_post_entry, user_profile
from maeutic.infrastructure.database import get_db
from maeutic.models.user import User
from maeutic.schemas.account import ProfileUpdate
from maeutic.services.account_service import AccountService

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("/{username}")
async def get_profile(username: str, db: AsyncSession = Depends(get_db)):
    user = await AccountService(db).get_by_username_or_404(username)
    return {"user": user_profile(user)}


@router.get("/{username}/overview")
async def profile_overview(username: str, db: AsyncSession = Depends(get_db)):
    return await AccountService(db).overview(username)


@router.get("/{username}/posts")
async def profile_posts(username: str, db: AsyncSession = Depends(get_db)):
    return [user_post_entry(p) for p in await AccountService(db).posts_by(username)]


@router.get("/{username}/comments")
async def profile_comments(username: str, db: AsyncSession = Depends(get_db)):
    return [user_comment_entry(c) for c in await AccountService(db).comments_by(username)]


@router.put("")
async def update_profile(
    body: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    user = await AccountService(db).update_profile(user, body)
    return {"success": True, "user": user_profile(user)}


@router.delete("")
async def delete_account(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await AccountService(db).delete_account(user)
    return {"success": True, "message": "Account deleted"}
