"""User ORM — accounts, researcher profile, and network/block lists.

Invariants:
    - email and username are unique
    - network, blocked, blocked_by are JSON lists of int user ids without duplicates
    - blocked (ids this user blocked) mirrors other users' blocked_by
    - List updates always assign a new list (JSON columns are not mutation-tracked)

Design Decisions:
    - ID lists as JSON over association tables: matches the existing schema and
      keeps "is X in my network" a single-row read
    - List rules live in core/relations.py; methods here only reassign
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, JSON, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from maeutic.db.base import Base
from maeutic.core.domain_types import UserType
from maeutic.core.relations import normalize_ids, with_id, without_id


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(180), unique=True, nullable=False)
    username: Mapped[str] = mapped_column(String(180), unique=True, nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    affiliation_location: Mapped[str | None] = mapped_column(String(250), nullable=True)
    specialization: Mapped[str | None] = mapped_column(String(250), nullable=True)
    research_topic: Mapped[str | None] = mapped_column(String(250), nullable=True)
    profile_image: Mapped[str | None] = mapped_column(String(255), nullable=True)
    genre: Mapped[str | None] = mapped_column(String(20), nullable=True)
    user_type: Mapped[int] = mapped_column(
        Integer, nullable=False, default=UserType.MEMBER.value,
    )
    network: Mapped[list | None] = mapped_column(JSON, nullable=True, default=list)
    blocked: Mapped[list | None] = mapped_column(JSON, nullable=True, default=list)
    blocked_by: Mapped[list | None] = mapped_column(
        "blockedby", JSON, nullable=True, default=list,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    questions: Mapped[list["UserQuestion"]] = relationship(
        "UserQuestion", back_populates="user",
        cascade="all, delete-orphan", lazy="selectin",
    )

    @property
    def is_admin(self) -> bool:
        return self.user_type == UserType.ADMIN.value

    def can_manage(self, owner_id: int | None) -> bool:
        """Owners manage their own content; admins manage everything."""
        return self.is_admin or (owner_id is not None and owner_id == self.id)

    @property
    def profile_image_url(self) -> str | None:
        return f"/profile_images/{self.profile_image}" if self.profile_image else None

    # --- network -----------------------------------------------------------

    def network_ids(self) -> list[int]:
        return normalize_ids(self.network)

    def add_to_network(self, user_id: int) -> None:
        self.network = with_id(self.network, user_id)

    def remove_from_network(self, user_id: int) -> None:
        self.network = without_id(self.network, user_id)

    # --- blocking ----------------------------------------------------------

    def add_to_blocked(self, user_id: int) -> None:
        self.blocked = with_id(self.blocked, user_id)

    def remove_from_blocked(self, user_id: int) -> None:
        self.blocked = without_id(self.blocked, user_id)

    def is_blocked(self, user_id: int) -> bool:
        return user_id in normalize_ids(self.blocked)

    def add_to_blocked_by(self, user_id: int) -> None:
        self.blocked_by = with_id(self.blocked_by, user_id)

    def remove_from_blocked_by(self, user_id: int) -> None:
        self.blocked_by = without_id(self.blocked_by, user_id)

    def is_blocked_by(self, user_id: int) -> bool:
        return user_id in normalize_ids(self.blocked_by)

    def forget(self, user_id: int) -> None:
        """Drop a deleted account from every id list."""
        for attr in ("network", "blocked", "blocked_by"):
            ids = normalize_ids(getattr(self, attr))
            if user_id in ids:
                setattr(self, attr, without_id(ids, user_id))


class UserQuestion(Base):
    """Answer to a profile question ("Question N" or "Taggable Question N")."""
    __tablename__ = "user_questions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    question: Mapped[str] = mapped_column(String(200), nullable=False)
    answer: Mapped[str] = mapped_column(Text, nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="questions")
