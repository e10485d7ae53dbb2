"""Shared Pydantic models for rows in the blog schema.

The blog application owns these records; the pipeline reads them back after
inserting and hands them to callers and tests.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


# === Enums ===

class PostStatus(str, Enum):
    """Lifecycle status of a post."""
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    SCHEDULED = "SCHEDULED"


class UserRole(str, Enum):
    """Account roles."""
    ADMIN = "ADMIN"
    EDITOR = "EDITOR"


# === Rows ===

class User(BaseModel):
    """An account that can own posts."""
    id: int
    email: str
    name: Optional[str] = None
    role: UserRole = UserRole.EDITOR


class Category(BaseModel):
    """A post category, unique by slug."""
    id: int
    name: str
    slug: str
    description: Optional[str] = None


class Tag(BaseModel):
    """A post tag, unique by slug."""
    id: int
    name: str
    slug: str


class Post(BaseModel):
    """A stored post with its category and tags resolved."""
    id: int
    title: str
    slug: str
    excerpt: Optional[str] = None
    content: str
    featured_image: Optional[str] = None
    status: PostStatus = PostStatus.DRAFT
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    keywords: Optional[str] = None
    read_time: int = Field(default=1, ge=1)
    views: int = Field(default=0, ge=0)
    featured: bool = False
    published_at: Optional[datetime] = None
    author_id: int
    category_id: Optional[int] = None
    category: Optional[Category] = None
    tags: list[Tag] = Field(default_factory=list)

    @model_validator(mode="after")
    def _published_needs_timestamp(self) -> Post:
        if self.status == PostStatus.PUBLISHED and self.published_at is None:
            raise ValueError("A published post needs published_at")
        return self

    @property
    def is_public(self) -> bool:
        return self.status == PostStatus.PUBLISHED


def row_to_dict(row: sqlite3.Row | None) -> dict | None:
    """Convert a sqlite3.Row into a plain dict (None passes through)."""
    if row is None:
        return None
    return {key: row[key] for key in row.keys()}
