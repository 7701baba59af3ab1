"""Library Service — authors, books and articles shared by the community.

Invariants:
    - Anyone reads the library; any signed-in user adds to it
    - Only the contributor or an admin edits or deletes an entry (403 otherwise)
    - Authors list by name, books and articles by title
    - Author and book updates apply every field the client sent, null included;
      article updates ignore null fields
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from maeutic.core.errors import PermissionDeniedError, ResourceNotFoundError
from maeutic.models.library import Article, Author, Book
from maeutic.models.user import User
from maeutic.schemas.library import (
    ArticleCreate, ArticleUpdate, AuthorCreate, AuthorUpdate, BookCreate, BookUpdate,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "title")


class LibraryService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _list(self, model, order_column) -> list:
        result = await self.db.execute(select(model).order_by(order_column, model.id))
        return list(result.scalars().all())

    async def _get(self, model, entry_id: int):
        entry = await self.db.get(model, entry_id)
        if not entry:
            raise ResourceNotFoundError(model.__name__, str(entry_id))
        return entry

    async def _create(self, model, user: User, fields: dict):
        entry = model(**fields, user_id=user.id)
        self.db.add(entry)
        await self.db.commit()
        logger.info(f"{model.__name__} {entry.id} added to library", extra={"user_id": user.id})
        return entry

    async def _update(self, model, user: User, entry_id: int, fields: dict):
        entry = await self._get(model, entry_id)
        if not user.can_manage(entry.user_id):
            raise PermissionDeniedError("Access denied")
        for name, value in fields.items():
            if value is None and name in REQUIRED_FIELDS:
                continue
            setattr(entry, name, value)
        await self.db.commit()
        return entry

    async def _delete(self, model, user: User, entry_id: int) -> None:
        entry = await self._get(model, entry_id)
        if not user.can_manage(entry.user_id):
            raise PermissionDeniedError("Access denied")
        await self.db.delete(entry)
        await self.db.commit()
        logger.info(f"{model.__name__} {entry_id} removed from library", extra={"user_id": user.id})

    # --- authors ---

    async def authors(self) -> list[Author]:
        return await self._list(Author, Author.name)

    async def get_author(self, author_id: int) -> Author:
        return await self._get(Author, author_id)

    async def create_author(self, user: User, body: AuthorCreate) -> Author:
        return await self._create(Author, user, {**body.model_dump(), "user": user})

    async def update_author(self, user: User, author_id: int, body: AuthorUpdate) -> Author:
        return await self._update(Author, user, author_id, body.model_dump(exclude_unset=True))

    async def delete_author(self, user: User, author_id: int) -> None:
        await self._delete(Author, user, author_id)

    # --- books ---

    async def books(self) -> list[Book]:
        return await self._list(Book, Book.title)

    async def create_book(self, user: User, body: BookCreate) -> Book:
        return await self._create(Book, user, body.model_dump())

    async def update_book(self, user: User, book_id: int, body: BookUpdate) -> Book:
        return await self._update(Book, user, book_id, body.model_dump(exclude_unset=True))

    async def delete_book(self, user: User, book_id: int) -> None:
        await self._delete(Book, user, book_id)

    # --- articles ---

    async def articles(self) -> list[Article]:
        return await self._list(Article, Article.title)

    async def create_article(self, user: User, body: ArticleCreate) -> Article:
        return await self._create(Article, user, body.model_dump())

    async def update_article(self, user: User, article_id: int, body: ArticleUpdate) -> Article:
        return await self._update(Article, user, article_id, body.model_dump(exclude_none=True))

    async def delete_article(self, user: User, article_id: int) -> None:
        await self._delete(Article, user, article_id)
