"""Notification ORM — pending network requests and system events for a recipient.

Invariants:
    - recipient is mandatory (deleted with the user); sender is optional (SET NULL)
    - At most one pending network_request per (sender, recipient) is created by the service
    - Accepted or declined requests are deleted rather than kept with a new status
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, Boolean, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from maeutic.db.base import Base
from maeutic.core.domain_types import NotificationStatus


class Notification(Base):
    __tablename__ = "notifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[str] = mapped_column(String(100), nullable=False)
    data: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    recipient_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    sender_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True,
    )
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=NotificationStatus.PENDING.value,
    )
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    recipient: Mapped["User"] = relationship(
        "User", foreign_keys=[recipient_id], lazy="selectin",
    )
    sender: Mapped["User | None"] = relationship(
        "User", foreign_keys=[sender_id], lazy="selectin",
    )
