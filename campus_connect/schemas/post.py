"""Post Schemas — Pydantic models with field-level validation for the post API.

Invariants:
    - PostCreate: title <= 200 chars, text fields stripped; per-type rules live in
      core/post_rules.py (one source of truth, shared with the service)
    - PostOut is a tagged union discriminated on `type`: an article always has
      content, a photo/video always has a media_url
    - CommentCreate.content: 1-2000 chars after strip

Design Decisions:
    - Discriminated union over one loose model with optional fields: a row that
      breaks its variant's shape fails response validation instead of leaking
"""

from datetime import datetime
from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from campus_connect.core.domain_types import PostType, ToggleState


class PostCreate(BaseModel):
    """Post creation — media is already uploaded; we only get its reference."""
    type: PostType
    title: str | None = Field(None, max_length=200)
    content: str | None = Field(None, max_length=20_000)
    media_url: str | None = Field(None, max_length=2000)
    media_type: str | None = Field(None, max_length=100)
    media_size_bytes: int | None = Field(None, ge=0)

    @field_validator("title", "content", "media_url", "media_type")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else None


class AuthorOut(BaseModel):
    id: UUID
    display_name: str
    avatar_url: str | None = None


class CollegeRef(BaseModel):
    id: UUID
    name: str


class _PostOutBase(BaseModel):
    id: UUID
    title: str | None = None
    view_count: int = Field(ge=0)
    created_at: datetime
    author: AuthorOut
    college: CollegeRef
    like_count: int = Field(ge=0)
    comment_count: int = Field(ge=0)
    is_liked: bool = False


class ArticlePostOut(_PostOutBase):
    type: Literal["article"]
    content: str


class PhotoPostOut(_PostOutBase):
    type: Literal["photo"]
    content: str | None = None  # caption
    media_url: str
    media_type: str | None = None


class VideoPostOut(_PostOutBase):
    type: Literal["video"]
    content: str | None = None  # description
    media_url: str
    media_type: str | None = None


PostOut = Annotated[
    Union[ArticlePostOut, PhotoPostOut, VideoPostOut],
    Field(discriminator="type"),
]


class CommentCreate(BaseModel):
    content: str = Field(min_length=1, max_length=2000)

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("comment cannot be empty or whitespace")
        return v


class CommentOut(BaseModel):
    id: UUID
    post_id: UUID
    content: str
    created_at: datetime
    author: AuthorOut


class PostDetailOut(BaseModel):
    post: PostOut
    comments: list[CommentOut]


class LikeOut(BaseModel):
    """Result of a like toggle. status=rolled_back means the write failed."""
    liked: bool
    like_count: int = Field(ge=0)
    status: ToggleState
