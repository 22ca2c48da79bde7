"""
Post schemas.

This module defines the request and response models of the posts API.
``PostPayload`` accepts the loosely typed request body; ``PostInput`` trims
and normalizes it and enforces the field rules, one message per invalid
field (see ``app.services.validation.validate_post``).
"""

from datetime import datetime
from re import IGNORECASE
from re import compile as re_compile
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from app.configs.settings import (
    CONTENT_MIN_LENGTH,
    EXCERPT_MAX_LENGTH,
    TAG_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
)

IMAGE_URL_PATTERN = re_compile(r"^https?://.+\.(jpg|jpeg|png|gif|webp)$", IGNORECASE)


def normalize_tags(tags: list[str] | str | None) -> list[str]:
    """
    Normalize tags given as a list or as one comma-separated string.

    Entries are trimmed and blanks dropped; order is kept and duplicates are
    not removed.

    Examples:
    --------
    >>> normalize_tags("a, b ,, c")
    ['a', 'b', 'c']
    >>> normalize_tags(["a", "", "b "])
    ['a', 'b']
    """
    if not tags:
        return []
    items = tags.split(",") if isinstance(tags, str) else tags
    return [tag.strip() for tag in items if tag.strip()]


def is_image_url(value: str) -> bool:
    """Return True if ``value`` is an http(s) URL to a jpg/jpeg/png/gif/webp file."""
    return IMAGE_URL_PATTERN.fullmatch(value) is not None


class PostPayload(BaseModel):
    """Raw create/update request body."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "Hello World",
                "content": "My very first post on this blog.",
                "excerpt": "A first post",
                "coverImage": "https://example.com/cover.jpg",
                "tags": "intro, meta",
            },
        },
    )

    title: str | None = Field(default=None, description="Post title (3-200 characters)")
    content: str | None = Field(default=None, description="Post content (min 10 characters)")
    excerpt: str | None = Field(default=None, description="Optional excerpt (max 500 characters)")
    cover_image: str | None = Field(
        default=None,
        alias="coverImage",
        description="Optional cover image URL (jpg, jpeg, png, gif, webp)",
    )
    tags: list[str] | str | None = Field(
        default=None,
        description="Tags as a list or a comma-separated string",
    )


class PostInput(BaseModel):
    """
    Validated and normalized post fields, ready for persistence.

    Text is trimmed before the length and format rules run. ``excerpt`` and
    ``cover_image`` only count as set when they were passed in.
    """

    title: str = Field(default="", validate_default=True)
    content: str = Field(default="", validate_default=True)
    excerpt: str | None = None
    cover_image: str | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("title", "content", mode="before")
    @classmethod
    def require_and_strip(cls, v: str | None, info: ValidationInfo) -> str:
        """Reject missing or empty text, then trim it."""
        if not v:
            raise PydanticCustomError(
                "required",
                "{field} is required",
                {"field": str(info.field_name).capitalize()},
            )
        return v.strip() if isinstance(v, str) else v

    @field_validator("excerpt", "cover_image", mode="before")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if isinstance(v, str):
            return v.strip() or None
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v: list[str] | str | None) -> list[str]:
        return normalize_tags(v)

    @field_validator("title", mode="after")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Validate title length."""
        if len(v) < TITLE_MIN_LENGTH:
            raise PydanticCustomError(
                "title_too_short",
                "Title must be at least {min_length} characters long",
                {"min_length": TITLE_MIN_LENGTH},
            )
        if len(v) > TITLE_MAX_LENGTH:
            raise PydanticCustomError(
                "title_too_long",
                "Title cannot exceed {max_length} characters",
                {"max_length": TITLE_MAX_LENGTH},
            )
        return v

    @field_validator("content", mode="after")
    @classmethod
    def validate_content(cls, v: str) -> str:
        if len(v) < CONTENT_MIN_LENGTH:
            raise PydanticCustomError(
                "content_too_short",
                "Content must be at least {min_length} characters long",
                {"min_length": CONTENT_MIN_LENGTH},
            )
        return v

    @field_validator("excerpt", mode="after")
    @classmethod
    def validate_excerpt(cls, v: str | None) -> str | None:
        if v is not None and len(v) > EXCERPT_MAX_LENGTH:
            raise PydanticCustomError(
                "excerpt_too_long",
                "Excerpt cannot exceed {max_length} characters",
                {"max_length": EXCERPT_MAX_LENGTH},
            )
        return v

    @field_validator("cover_image", mode="after")
    @classmethod
    def validate_cover_image(cls, v: str | None) -> str | None:
        """Only http(s) links to jpg, jpeg, png, gif or webp files are accepted."""
        if v is not None and not is_image_url(v):
            raise PydanticCustomError(
                "cover_image_format",
                "Cover image must be a valid image URL (jpg, jpeg, png, gif, webp)",
            )
        return v

    @field_validator("tags", mode="after")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        """Validate tags length."""
        if any(len(tag) > TAG_MAX_LENGTH for tag in v):
            raise PydanticCustomError(
                "tag_too_long",
                "Each tag cannot exceed {max_length} characters",
                {"max_length": TAG_MAX_LENGTH},
            )
        return v


class PostResponse(BaseModel):
    """Post as returned by the API."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    title: str
    slug: str
    content: str
    excerpt: str | None = None
    cover_image: str | None = Field(default=None, alias="coverImage")
    tags: list[str]
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class PaginationMeta(BaseModel):
    """Pagination block of a post listing."""

    page: int
    limit: int
    total: int
    pages: int


class PostListResponse(BaseModel):
    """One page of posts plus pagination metadata."""

    posts: list[PostResponse]
    pagination: PaginationMeta


class DeletePostResponse(BaseModel):
    """Confirmation returned after a post is deleted."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = "Post deleted successfully"
    deleted_post: PostResponse = Field(alias="deletedPost")


class HealthCheckResponse(BaseModel):
    """Health check payload."""

    status: str = "OK"
    message: str = "Server is running"
