"""Library Routes — shared authors, books and articles.

Invariants:
    - Listings are public and return bare JSON arrays
    - Writes need a signed-in user; edits and deletes need the contributor or an admin
    - Author and book updates are accepted on PUT and on POST (multipart-era clients
      post updates to the item URL)
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from maeutic.api.deps import get_current_user
from maeutic.api.presenters import article_payload, author_payload, book_payload
from maeutic.infrastructure.database import get_db
from maeutic.models.user import User
from maeutic.schemas.library import (
    ArticleCreate, ArticleUpdate, AuthorCreate, AuthorUpdate, BookCreate, BookUpdate,
)
from maeutic.services.library_service import LibraryService

router = APIRouter(prefix="/api/library", tags=["library"])


# --- authors ---

@router.get("/authors")
async def list_authors(db: AsyncSession = Depends(get_db)):
    return [author_payload(a) for a in await LibraryService(db).authors()]


@router.get("/authors/{author_id}")
async def get_author(author_id: int, db: AsyncSession = Depends(get_db)):
    return author_payload(await LibraryService(db).get_author(author_id))


@router.post("/authors", status_code=status.HTTP_201_CREATED)
async def create_author(
    body: AuthorCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return author_payload(await LibraryService(db).create_author(user, body))


@router.api_route("/authors/{author_id}", methods=["PUT", "POST"])
async def update_author(
    author_id: int,
    body: AuthorUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return author_payload(await LibraryService(db).update_author(user, author_id, body))


@router.delete("/authors/{author_id}")
async def delete_author(
    author_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await LibraryService(db).delete_author(user, author_id)
    return {"success": True}


# --- books ---

@router.get("/books")
async def list_books(db: AsyncSession = Depends(get_db)):
    return [book_payload(b) for b in await LibraryService(db).books()]


@router.post("/books", status_code=status.HTTP_201_CREATED)
async def create_book(
    body: BookCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return book_payload(await LibraryService(db).create_book(user, body))


@router.api_route("/books/{book_id}", methods=["PUT", "POST"])
async def update_book(
    book_id: int,
    body: BookUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return book_payload(await LibraryService(db).update_book(user, book_id, body))


@router.delete("/books/{book_id}")
async def delete_book(
    book_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await LibraryService(db).delete_book(user, book_id)
    return {"success": True}


# --- articles ---

@router.get("/articles")
async def list_articles(db: AsyncSession = Depends(get_db)):
    return [article_payload(a) for a in await LibraryService(db).articles()]


@router.post("/articles", status_code=status.HTTP_201_CREATED)
async def create_article(
    body: ArticleCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return article_payload(await LibraryService(db).create_article(user, body))


@router.put("/articles/{article_id}")
async def update_article(
    article_id: int,
    body: ArticleUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return article_payload(await LibraryService(db).update_article(user, article_id, body))


@router.delete("/articles/{article_id}")
async def delete_article(
    article_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await LibraryService(db).delete_article(user, article_id)
    return {"success": True}
