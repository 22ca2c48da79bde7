from app.schemas.post import (
    DeletePostResponse,
    HealthCheckResponse,
    PaginationMeta,
    PostInput,
    PostListResponse,
    PostPayload,
    PostResponse,
    is_image_url,
    normalize_tags,
)

__all__ = [
    "DeletePostResponse",
    "HealthCheckResponse",
    "PaginationMeta",
    "PostInput",
    "PostListResponse",
    "PostPayload",
    "PostResponse",
    "is_image_url",
    "normalize_tags",
]
