"""Messaging Service — private conversations and the global chat.

Invariants:
    - Only participants read or post in a conversation
    - No reads or posts while either participant blocks the other
    - One conversation per unordered user pair (found in either orientation)
    - Message bodies are trimmed; empty bodies are rejected
    - Encryption is NOT done here: the Message ORM hooks encrypt on flush and
      decrypt on load, so services only ever see plaintext

Design Decisions:
    - find_or_create_conversation flushes instead of committing when asked, so the
      network flows (accept request) stay in one transaction
"""

import logging

from sqlalchemy import select, or_, and_
from sqlalchemy.ext.asyncio import AsyncSession

from maeutic.core.relations import is_blocked_between
from maeutic.core.errors import (
    BlockedError, InvalidOperationError, PermissionDeniedError, ResourceNotFoundError,
)
from maeutic.models.messaging import Conversation, Message
from maeutic.models.user import User

logger = logging.getLogger(__name__)


def blocked_between(a: User, b: User | None) -> bool:
    if b is None:
        return False
    return is_blocked_between(a.blocked, a.id, b.blocked, b.id)


class MessagingService:
    """Conversation and message operations (plaintext in, plaintext out)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def conversations_for(self, user: User) -> list[Conversation]:
        result = await self.db.execute(
            select(Conversation)
            .where(or_(Conversation.user1_id == user.id, Conversation.user2_id == user.id))
            .order_by(Conversation.id.desc())
        )
        return list(result.scalars().all())

    async def find_conversation(self, a: User, b: User) -> Conversation | None:
        result = await self.db.execute(
            select(Conversation).where(or_(
                and_(Conversation.user1_id == a.id, Conversation.user2_id == b.id),
                and_(Conversation.user1_id == b.id, Conversation.user2_id == a.id),
            )).limit(1)
        )
        return result.scalar_one_or_none()

    async def find_or_create_conversation(
        self, a: User, b: User, commit: bool = True,
    ) -> Conversation:
        conversation = await self.find_conversation(a, b)
        if conversation:
            return conversation

        conversation = Conversation(user1_id=a.id, user2_id=b.id)
        self.db.add(conversation)
        await self.db.flush()
        if commit:
            await self.db.commit()
        logger.info(
            "Conversation created",
            extra={"user_id": a.id, "target_user_id": b.id, "conversation_id": conversation.id},
        )
        return conversation

    async def conversation_with(self, current: User, other_id: int) -> Conversation:
        other = await self.db.get(User, other_id)
        if not other or other.id == current.id:
            raise InvalidOperationError("Invalid user")
        if blocked_between(current, other):
            raise BlockedError("Conversation unavailable: user is blocked")
        return await self.find_or_create_conversation(current, other)

    async def open_conversation(self, current: User, conversation_id: int) -> Conversation:
        """Load a conversation the current user may read and post in."""
        conversation = await self.db.get(Conversation, conversation_id)
        if not conversation:
            raise ResourceNotFoundError("Conversation", str(conversation_id))
        if not conversation.has_participant(current.id):
            raise PermissionDeniedError("Access denied")
        if blocked_between(current, conversation.other_participant(current.id)):
            raise BlockedError("Conversation unavailable: user is blocked")
        return conversation

    async def messages(self, current: User, conversation_id: int) -> list[Message]:
        conversation = await self.open_conversation(current, conversation_id)
        result = await self.db.execute(
            select(Message)
            .where(Message.conversation_id == conversation.id)
            .order_by(Message.sent_at.asc(), Message.id.asc())
        )
        return list(result.scalars().all())

    async def last_message(self, conversation: Conversation) -> Message | None:
        result = await self.db.execute(
            select(Message)
            .where(Message.conversation_id == conversation.id)
            .order_by(Message.sent_at.desc(), Message.id.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def send(self, current: User, conversation_id: int, content: str | None) -> Message:
        conversation = await self.open_conversation(current, conversation_id)
        text = (content or "").strip()
        if not text:
            raise InvalidOperationError("Message is empty")

        message = Message(sender=current, conversation_id=conversation.id)
        message.content = text
        self.db.add(message)
        await self.db.commit()
        logger.info(
            "Message sent",
            extra={"user_id": current.id, "conversation_id": conversation.id},
        )
        return message

    # --- global chat ---

    async def global_messages(self, limit: int | None = None) -> list[Message]:
        """Whole room history oldest first, or only the newest `limit` messages."""
        query = (
            select(Message)
            .where(Message.conversation_id.is_(None))
            .order_by(Message.sent_at.desc(), Message.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(reversed(result.scalars().all()))

    async def post_global(self, current: User, text: str | None) -> Message:
        body = (text or "").strip()
        if not body:
            raise InvalidOperationError("Missing text")
        message = Message(sender=current, conversation_id=None)
        message.content = body
        self.db.add(message)
        await self.db.commit()
        return message
