"""Network Service — friend list toggling, blocking and network-request notifications.

Invariants:
    - Connections are symmetric: both users' network lists change together
    - Blocking is mirrored: current.blocked <-> target.blocked_by
    - At most one pending network_request exists per (sender, recipient)
    - Toggling against a blocked user (either direction) raises BlockedError
    - Accepting a request always leaves a conversation between the two users

Design Decisions:
    - Request state lives in Notification rows, not in a separate table: a pending
      request IS the notification shown to the recipient
    - Status resolution delegated to core/relations.py (pure, tested without DB)
"""

import logging

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from maeutic.core.domain_types import (
    NetworkStatus, NotificationStatus, NotificationType, ToggleAction,
)
from maeutic.core.errors import (
    BlockedError, InvalidOperationError, PermissionDeniedError, ResourceNotFoundError,
)
from maeutic.core.relations import decide_toggle, resolve_network_status
from maeutic.models.notification import Notification
from maeutic.models.user import User
from maeutic.services.account_service import get_user_or_404
from maeutic.services.messaging_service import MessagingService

logger = logging.getLogger(__name__)


class NetworkService:
    """Network relationships between two users."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def members(self, user: User) -> list[User]:
        ids = user.network_ids()
        if not ids:
            return []
        result = await self.db.execute(select(User).where(User.id.in_(ids)))
        return list(result.scalars().all())

    async def _pending_request(self, sender_id: int, recipient_id: int) -> Notification | None:
        result = await self.db.execute(
            select(Notification).where(
                Notification.type == NotificationType.NETWORK_REQUEST.value,
                Notification.sender_id == sender_id,
                Notification.recipient_id == recipient_id,
                Notification.status == NotificationStatus.PENDING.value,
            ).limit(1)
        )
        return result.scalar_one_or_none()

    async def status(self, current: User, target: User) -> NetworkStatus:
        outgoing = await self._pending_request(current.id, target.id)
        incoming = await self._pending_request(target.id, current.id)
        return resolve_network_status(
            current.id, target.id, current.network,
            has_outgoing_request=outgoing is not None,
            has_incoming_request=incoming is not None,
        )

    def _connect(self, a: User, b: User) -> None:
        a.add_to_network(b.id)
        b.add_to_network(a.id)

    async def toggle(self, current: User, target_id: int) -> dict:
        """Advance the relationship one step. Returns {"status": ..., "conversationId"?}."""
        target = await get_user_or_404(self.db, target_id)
        if target.id == current.id:
            raise InvalidOperationError("Cannot add yourself to your network")
        if current.is_blocked(target.id) or current.is_blocked_by(target.id):
            raise BlockedError("Action not allowed: user is blocked")

        action = decide_toggle(await self.status(current, target))
        result: dict = {"status": action.value}

        if action == ToggleAction.REMOVE:
            current.remove_from_network(target.id)
            target.remove_from_network(current.id)
        elif action == ToggleAction.CANCEL:
            await self.db.delete(await self._pending_request(current.id, target.id))
        elif action == ToggleAction.ACCEPT:
            self._connect(current, target)
            await self.db.delete(await self._pending_request(target.id, current.id))
            conversation = await MessagingService(self.db).find_or_create_conversation(
                current, target, commit=False,
            )
            await self.db.flush()
            result["conversationId"] = conversation.id
        else:
            self.db.add(Notification(
                type=NotificationType.NETWORK_REQUEST.value,
                recipient_id=target.id,
                sender_id=current.id,
                status=NotificationStatus.PENDING.value,
                data={"message": f"{current.username} wants to join your network"},
            ))

        await self.db.commit()
        logger.info(
            f"Network toggle: {action.value}",
            extra={"user_id": current.id, "target_user_id": target.id},
        )
        return result

    async def toggle_block(self, current: User, target_id: int) -> bool:
        """Block or unblock target. Returns the new blocked state."""
        target = await get_user_or_404(self.db, target_id)
        if target.id == current.id:
            raise InvalidOperationError("Cannot block yourself")

        if current.is_blocked(target.id):
            current.remove_from_blocked(target.id)
            target.remove_from_blocked_by(current.id)
            blocked = False
        else:
            current.add_to_blocked(target.id)
            target.add_to_blocked_by(current.id)
            blocked = True

        await self.db.commit()
        logger.info(
            "User blocked" if blocked else "User unblocked",
            extra={"user_id": current.id, "target_user_id": target.id},
        )
        return blocked

    # --- notifications ---

    async def notifications(self, user: User) -> list[Notification]:
        result = await self.db.execute(
            select(Notification)
            .where(Notification.recipient_id == user.id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
        )
        return list(result.scalars().all())

    async def _owned_notification(self, user: User, notification_id: int) -> Notification:
        notification = await self.db.get(Notification, notification_id)
        if not notification:
            raise ResourceNotFoundError("Notification", str(notification_id))
        if notification.recipient_id != user.id:
            raise PermissionDeniedError("Access denied")
        return notification

    async def accept(self, user: User, notification_id: int) -> int | None:
        """Accept a pending request. Returns the conversation id, None if the sender is gone."""
        notification = await self._owned_notification(user, notification_id)
        if (
            notification.type != NotificationType.NETWORK_REQUEST.value
            or notification.status != NotificationStatus.PENDING.value
        ):
            raise InvalidOperationError("Invalid notification")

        sender = notification.sender
        if sender is None:
            await self.db.delete(notification)
            await self.db.commit()
            return None

        self._connect(user, sender)
        await self.db.delete(notification)
        conversation = await MessagingService(self.db).find_or_create_conversation(
            user, sender, commit=False,
        )
        await self.db.commit()
        logger.info(
            "Network request accepted",
            extra={"user_id": user.id, "target_user_id": sender.id},
        )
        return conversation.id

    async def decline(self, user: User, notification_id: int) -> None:
        notification = await self._owned_notification(user, notification_id)
        await self.db.delete(notification)
        await self.db.commit()

    async def clear_all(self, user: User) -> None:
        await self.db.execute(
            delete(Notification).where(Notification.recipient_id == user.id)
        )
        await self.db.commit()
