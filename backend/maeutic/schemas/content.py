"""Content Schemas — request bodies for forum posts, comments and messages.

Invariants:
    - Wire format is camelCase (forumId, parentId)
    - Text fields are length-bounded here; emptiness after trimming is checked by services
"""

from pydantic import BaseModel, Field

from maeutic.schemas.account import CamelModel


class PostCreate(CamelModel):
    forum_id: int
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=50_000)
    parent_id: int | None = None


class PostUpdate(CamelModel):
    name: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=50_000)


class CommentBody(BaseModel):
    body: str = Field(min_length=1, max_length=10_000)


class MessageBody(BaseModel):
    content: str | None = Field(None, max_length=10_000)


class ChatBody(BaseModel):
    text: str = Field(min_length=1, max_length=10_000)
