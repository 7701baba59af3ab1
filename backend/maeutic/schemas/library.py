"""Library Schemas — request bodies for library entries and resource links.

Invariants:
    - Wire format is camelCase (birthYear, deathYear)
    - Update bodies distinguish "absent" from "null": only fields the client
      sent are applied (model_fields_set)
"""

from pydantic import Field

from maeutic.schemas.account import CamelModel


class AuthorCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    birth_year: int | None = None
    death_year: int | None = None
    nationality: str | None = Field(None, max_length=255)
    link: str | None = Field(None, max_length=255)
    image: str | None = Field(None, max_length=255)


class AuthorUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    birth_year: int | None = None
    death_year: int | None = None
    nationality: str | None = Field(None, max_length=255)
    link: str | None = Field(None, max_length=255)
    image: str | None = Field(None, max_length=255)


class BookCreate(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    author: str | None = Field(None, max_length=255)
    link: str | None = Field(None, max_length=255)
    image: str | None = Field(None, max_length=255)


class BookUpdate(CamelModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    author: str | None = Field(None, max_length=255)
    link: str | None = Field(None, max_length=255)
    image: str | None = Field(None, max_length=255)


class ArticleCreate(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    author: str = Field("", max_length=255)
    link: str = Field("", max_length=255)


class ArticleUpdate(CamelModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    author: str | None = Field(None, max_length=255)
    link: str | None = Field(None, max_length=255)


class ResourceCreate(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    link: str = Field(min_length=1, max_length=255)
    description: str | None = Field(None, max_length=10_000)


class ResourceUpdate(CamelModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    link: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=10_000)
