"""Global Chat Routes — the site-wide room (messages without a conversation)."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from maeutic.api.deps import get_current_user, get_optional_user
from maeutic.api.presenters import message_payload
from maeutic.infrastructure.database import get_db
from maeutic.models.user import User
from maeutic.schemas.content import ChatBody
from maeutic.services.messaging_service import MessagingService

router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.get("/messages")
async def chat_messages(
    limit: int | None = Query(None, ge=1),
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    messages = await MessagingService(db).global_messages(limit)
    current_id = user.id if user else None
    return {"messages": [message_payload(m, current_id) for m in messages]}


@router.post("/send", status_code=status.HTTP_201_CREATED)
async def chat_send(
    body: ChatBody,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    message = await MessagingService(db).post_global(user, body.text)
    return {"success": True, "message": message_payload(message, user.id)}
