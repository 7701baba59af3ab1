"""Notification Routes — list, accept/decline network requests, clear."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from maeutic.api.deps import get_current_user
from maeutic.api.presenters import notification_payload
from maeutic.infrastructure.database import get_db
from maeutic.models.user import User
from maeutic.services.network_service import NetworkService

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("")
async def list_notifications(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db),
):
    notifications = await NetworkService(db).notifications(user)
    return {
        "notifications": [notification_payload(n) for n in notifications],
        "count": len(notifications),
        "unread": sum(1 for n in notifications if not n.is_read),
    }


@router.post("/accept/{notification_id}")
async def accept_notification(
    notification_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    conversation_id = await NetworkService(db).accept(user, notification_id)
    return {"success": True, "conversationId": conversation_id}


@router.post("/decline/{notification_id}")
async def decline_notification(
    notification_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await NetworkService(db).decline(user, notification_id)
    return {"success": True}


@router.post("/clear-all")
async def clear_notifications(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db),
):
    await NetworkService(db).clear_all(user)
    return {"success": True}
