"""Library ORM — shared bibliography of authors, books and articles.

Invariants:
    - Every entry remembers who added it (user_id); deleting that user keeps
      the entry with user_id NULL
    - Book.author and Article.author are free text, not a link to Author

Design Decisions:
    - Three small tables instead of one polymorphic "item" table: each kind has
      its own fields and its own listing order
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from maeutic.db.base import Base


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _contributor_fk():
    return mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True,
    )


class Author(Base):
    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    birth_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    death_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    nationality: Mapped[str | None] = mapped_column(String(255), nullable=True)
    link: Mapped[str | None] = mapped_column(String(255), nullable=True)
    image: Mapped[str | None] = mapped_column(String(255), nullable=True)
    user_id: Mapped[int | None] = _contributor_fk()
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )

    user: Mapped["User | None"] = relationship("User", lazy="selectin")


class Book(Base):
    __tablename__ = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    author: Mapped[str | None] = mapped_column(String(255), nullable=True)
    link: Mapped[str | None] = mapped_column(String(255), nullable=True)
    image: Mapped[str | None] = mapped_column(String(255), nullable=True)
    user_id: Mapped[int | None] = _contributor_fk()
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )


class Article(Base):
    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    link: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    user_id: Mapped[int | None] = _contributor_fk()
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )
