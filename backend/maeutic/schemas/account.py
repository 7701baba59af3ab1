"""Account Schemas — registration, login and profile payloads.

Invariants:
    - Wire format is camelCase (frontend contract); Python attributes are snake_case
    - RegisterRequest.password: 8-4096 chars
    - taggableQuestions maps a question index to a list of tags
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(CamelModel):
    email: str = Field(min_length=3, max_length=180, pattern=r"^[^@\s]+@[^@\s]+$")
    username: str = Field(min_length=2, max_length=180)
    password: str = Field(min_length=8, max_length=4096)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    genre: str | None = Field(None, pattern=r"^(female|male|other)$")
    affiliation_location: str | None = Field(None, max_length=250)
    specialization: str | None = Field(None, max_length=250)
    research_topic: str | None = Field(None, max_length=250)
    user_questions: dict[int, str] | None = None
    taggable_questions: dict[int, list[str]] | None = None

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username cannot be empty or whitespace")
        return v


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ProfileUpdate(CamelModel):
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    genre: str | None = Field(None, pattern=r"^(female|male|other)$")
    affiliation_location: str | None = Field(None, max_length=250)
    specialization: str | None = Field(None, max_length=250)
    research_topic: str | None = Field(None, max_length=250)
