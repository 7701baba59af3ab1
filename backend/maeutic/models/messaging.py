"""Messaging ORM — private conversations and (encrypted) messages.

Invariants:
    - A Conversation joins exactly two users (user1, user2); orientation is not meaningful
    - Message.encrypted_content is the only persisted form of the body
    - Message.content is in-memory plaintext, filled by the load/refresh hooks in
      infrastructure/message_encryption.py
    - Setting content on a persisted Message always marks encrypted_content
      modified (even when expired) so the update hook re-encrypts; the load hook
      bypasses the setter
    - conversation_id NULL means the message belongs to the global chat

Design Decisions:
    - content as a plain property (not a column): plaintext never reaches the
      INSERT/UPDATE statement, even by mistake
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, Text, DateTime, ForeignKey, inspect
from sqlalchemy.orm import Mapped, mapped_column, relationship

from maeutic.db.base import Base


class Conversation(Base):
    __tablename__ = "conversations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user1_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    user2_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )

    user1: Mapped["User"] = relationship("User", foreign_keys=[user1_id], lazy="selectin")
    user2: Mapped["User"] = relationship("User", foreign_keys=[user2_id], lazy="selectin")
    messages: Mapped[list["Message"]] = relationship(
        "Message", back_populates="conversation",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="Message.sent_at",
    )

    def has_participant(self, user_id: int) -> bool:
        return user_id in (self.user1_id, self.user2_id)

    def other_participant(self, user_id: int) -> "User":
        return self.user2 if self.user1_id == user_id else self.user1


class Message(Base):
    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    encrypted_content: Mapped[str] = mapped_column(Text, nullable=False)
    sender_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True,
    )
    conversation_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("conversations.id", ondelete="CASCADE"), nullable=True,
    )
    sent_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    sender: Mapped["User | None"] = relationship("User", lazy="selectin")
    conversation: Mapped["Conversation | None"] = relationship(
        "Conversation", back_populates="messages",
    )

    _plaintext = None
    _undecryptable = False

    @property
    def content(self) -> str | None:
        return self._plaintext

    @content.setter
    def content(self, value: str | None) -> None:
        self._plaintext = value
        self._undecryptable = False
        if value is not None and inspect(self).has_identity:
            # overwritten with the ciphertext of value by before_update
            self.encrypted_content = ""
