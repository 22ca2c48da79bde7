"""Post database model using SQLModel."""

from datetime import datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import JSON, DateTime, Index, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from app.utils.helpers import utc_now

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
TagsType = JSON().with_variant(JSONB(), "postgresql")


class PostDB(SQLModel, table=True):
    """
    Post database model.

    This model represents the posts table. ``slug`` carries a unique index so
    the database rejects a second writer that raced past the slug probe.
    """

    __tablename__ = cast("declared_attr[str]", "posts")

    __table_args__ = (Index("ix_posts_created_at", "created_at"),)

    # Primary key
    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Post ID",
    )

    # Required fields
    title: str = Field(
        sa_column=Column(String(200), nullable=False),
        description="Post title",
    )
    slug: str = Field(
        sa_column=Column(String(255), unique=True, nullable=False, index=True),
        description="URL-friendly slug (unique)",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Post content",
    )

    # Optional fields
    excerpt: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Post excerpt",
    )
    cover_image: str | None = Field(
        default=None,
        sa_column=Column(String(2048)),
        description="Cover image URL",
    )
    tags: list[str] = Field(
        default_factory=list,
        sa_column=Column(TagsType, nullable=False),
        description="Post tags",
    )

    # Timestamps (timezone-aware)
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "title": "Hello World",
                "slug": "hello-world",
                "content": "My very first post on this blog.",
                "excerpt": "A first post",
                "cover_image": "https://example.com/cover.jpg",
                "tags": ["intro", "meta"],
            },
        },
    )
