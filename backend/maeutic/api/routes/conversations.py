"""Conversation Routes — private one-to-one messaging.

Invariants:
    - Payloads carry decrypted content only (decryption happens on ORM load)
    - Blocked pairs get 403 on read, post and open
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from maeutic.api.deps import get_current_user
from maeutic.api.presenters import message_payload, user_summary
from maeutic.infrastructure.database import get_db
from maeutic.models.user import User
from maeutic.schemas.content import MessageBody
from maeutic.services.messaging_service import MessagingService, blocked_between

router = APIRouter(prefix="/api", tags=["conversations"])


@router.get("/conversations")
async def list_conversations(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db),
):
    service = MessagingService(db)
    items = []
    for conversation in await service.conversations_for(user):
        other = conversation.other_participant(user.id)
        last = await service.last_message(conversation)
        items.append({
            "id": conversation.id,
            "otherUser": user_summary(other),
            "isBlocked": blocked_between(user, other),
            "lastMessage": message_payload(last, user.id) if last else None,
        })
    return {"conversations": items}


@router.get("/conversation/with/{user_id}")
async def conversation_with(
    user_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    conversation = await MessagingService(db).conversation_with(user, user_id)
    return {"conversationId": conversation.id}


@router.get("/conversation/{conversation_id}/messages")
async def conversation_messages(
    conversation_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    messages = await MessagingService(db).messages(user, conversation_id)
    return {"messages": [message_payload(m, user.id) for m in messages]}


@router.post(
    "/conversation/{conversation_id}/message",
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    conversation_id: int,
    body: MessageBody,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    message = await MessagingService(db).send(user, conversation_id, body.content)
    return {"success": True, "message": message_payload(message, user.id)}
