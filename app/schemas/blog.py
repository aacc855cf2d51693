"""Pydantic schemas for blog posts."""

from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel


class BlogPostCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    summary: str | None = None
    cover_image: str | None = Field(default=None, max_length=2048)
    tags: list[str] = Field(default_factory=list)
    published_at: datetime | None = Field(default=None, description="Null keeps the post a draft")


class BlogPostUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(default=None, min_length=1, max_length=255)
    content: str | None = Field(default=None, min_length=1)
    summary: str | None = None
    cover_image: str | None = Field(default=None, max_length=2048)
    tags: list[str] | None = None
    published_at: datetime | None = None


class BlogAuthorOut(CamelModel):
    full_name: str
    avatar_url: str | None = None


class BlogPostOut(CamelModel):
    id: str
    author_id: str
    title: str
    slug: str
    content: str
    summary: str | None = None
    cover_image: str | None = None
    tags: list[str] = Field(default_factory=list)
    published_at: datetime | None = None
    created_at: datetime | None = None
    author: BlogAuthorOut | None = None
