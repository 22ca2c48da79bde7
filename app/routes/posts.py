# app/routes/posts.py

"""
Post Routes.

Provides CRUD endpoints and paginated listing for posts.

Summary
-------
Endpoints include:
  - List posts (pagination, free-text search, tag filter)
  - Get post by id
  - Create post
  - Update post
  - Delete post

Validation
----------
Request bodies are validated and normalized by
`app.services.validation.validate_post` before any database call; every
violated field is reported in a single `400` response. Malformed post IDs
are rejected with `400` by the `PostIdDep` dependency.
"""

from logging import getLogger
from typing import Annotated

from fastapi import APIRouter, Body
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.configs import file_logger
from app.dependencies import PostIdDep, PostListQueryDep, PostRepoDep
from app.errors.posts import NotFoundError
from app.models import PostDB
from app.schemas import (
    DeletePostResponse,
    PaginationMeta,
    PostListResponse,
    PostPayload,
    PostResponse,
)
from app.services.validation import validate_post
from app.utils.helpers import page_count

router = APIRouter(prefix="/posts", tags=["📝 Posts"])

logger = file_logger(getLogger(__name__))

POST_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174000",
    "title": "Hello World",
    "slug": "hello-world",
    "content": "My very first post on this blog.",
    "excerpt": "A first post",
    "coverImage": "https://example.com/cover.jpg",
    "tags": ["intro", "meta"],
    "createdAt": "2025-01-01T10:00:00Z",
    "updatedAt": "2025-01-01T10:00:00Z",
}

BAD_REQUEST = {
    "description": "Bad request",
    "content": {
        "application/json": {
            "example": {
                "detail": "Title must be at least 3 characters long, Content is required",
                "errors": ["Title must be at least 3 characters long", "Content is required"],
            },
        },
    },
}

INVALID_ID = {
    "description": "Malformed post ID",
    "content": {"application/json": {"example": {"detail": "Invalid post ID"}}},
}

NOT_FOUND = {
    "description": "Not found",
    "content": {"application/json": {"example": {"detail": "Post not found"}}},
}

PAYLOAD_EXAMPLES = {
    "basic": {
        "summary": "Tags as a list",
        "value": {
            "title": "Hello World",
            "content": "My very first post on this blog.",
            "excerpt": "A first post",
            "coverImage": "https://example.com/cover.jpg",
            "tags": ["intro", "meta"],
        },
    },
    "comma_tags": {
        "summary": "Tags as a comma-separated string",
        "value": {
            "title": "Hello World",
            "content": "My very first post on this blog.",
            "tags": "intro, meta",
        },
    },
}


def db_post_to_response(db_post: PostDB) -> PostResponse:
    """
    Convert a `PostDB` instance to `PostResponse`.

    Parameters
    ----------
    db_post : PostDB
        Database post entity.

    Returns
    -------
    PostResponse
        Validated response model.
    """
    return PostResponse.model_validate(db_post.model_dump())


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=PostListResponse,
    summary="List posts",
    description="List posts newest first with pagination, free-text search and tag filter.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "posts": [POST_EXAMPLE],
                        "pagination": {"page": 1, "limit": 10, "total": 1, "pages": 1},
                    },
                },
            },
        },
        400: {
            "description": "Invalid query parameters",
            "content": {"application/json": {"example": {"detail": "Validation failed"}}},
        },
    },
    operation_id="posts_list",
)
async def list_posts(query: PostListQueryDep, repo: PostRepoDep) -> PostListResponse:
    """
    List posts.

    Parameters
    ----------
    query : PostListQuery
        Page, clamped limit, search text and tag filter.
    repo : PostRepository
        Repository dependency.

    Returns
    -------
    PostListResponse
        One page of posts and pagination metadata.
    """
    posts, total = await repo.list_posts(
        skip=query.skip,
        limit=query.limit,
        search=query.search,
        tag=query.tag,
    )
    return PostListResponse(
        posts=[db_post_to_response(post) for post in posts],
        pagination=PaginationMeta(
            page=query.page,
            limit=query.limit,
            total=total,
            pages=page_count(total, query.limit),
        ),
    )


@router.get(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Get post by ID",
    description="Retrieve a post by its UUID.",
    responses={
        200: {"content": {"application/json": {"example": POST_EXAMPLE}}},
        400: INVALID_ID,
        404: NOT_FOUND,
    },
    operation_id="posts_get_by_id",
)
async def get_post(post_id: PostIdDep, repo: PostRepoDep) -> PostResponse:
    """
    Get a post by ID.

    Raises
    ------
    NotFoundError
        If no post has this ID.
    """
    db_post = await repo.get_by_id(post_id)
    if not db_post:
        raise NotFoundError
    return db_post_to_response(db_post)


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a new post",
    description="Create a post. The slug is derived from the title and made unique.",
    responses={
        201: {"content": {"application/json": {"example": POST_EXAMPLE}}},
        400: BAD_REQUEST,
    },
    operation_id="posts_create",
)
async def create_post(
    payload: Annotated[PostPayload, Body(openapi_examples=PAYLOAD_EXAMPLES)],
    repo: PostRepoDep,
) -> PostResponse:
    """
    Create a new post.

    Parameters
    ----------
    payload : PostPayload
        Post input payload.
    repo : PostRepository
        Repository dependency.

    Returns
    -------
    PostResponse
        Created post, including its assigned slug.

    Raises
    ------
    ValidationError
        If any field is missing or invalid.
    """
    post_in = validate_post(payload)
    db_post = await repo.create(post_in)
    logger.info(f"New post created: {db_post.id} ({db_post.slug})")
    return db_post_to_response(db_post)


@router.put(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Update a post",
    description=(
        "Replace title, content and tags of a post; excerpt and cover image are "
        "changed only when sent. The slug is recomputed when the title changes."
    ),
    responses={
        200: {"content": {"application/json": {"example": POST_EXAMPLE}}},
        400: BAD_REQUEST,
        404: NOT_FOUND,
    },
    operation_id="posts_update",
)
async def update_post(
    post_id: PostIdDep,
    payload: Annotated[PostPayload, Body(openapi_examples=PAYLOAD_EXAMPLES)],
    repo: PostRepoDep,
) -> PostResponse:
    """
    Update a post.

    Raises
    ------
    ValidationError
        If any field is missing or invalid.
    NotFoundError
        If no post has this ID.
    """
    post_in = validate_post(payload)
    db_post = await repo.update(post_id, post_in)
    if not db_post:
        raise NotFoundError
    logger.info(f"Post updated: {db_post.id} ({db_post.slug})")
    return db_post_to_response(db_post)


@router.delete(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=DeletePostResponse,
    summary="Delete a post",
    description="Permanently delete a post. Other posts keep their slugs.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"message": "Post deleted successfully", "deletedPost": POST_EXAMPLE},
                },
            },
        },
        400: INVALID_ID,
        404: NOT_FOUND,
    },
    operation_id="posts_delete",
)
async def delete_post(post_id: PostIdDep, repo: PostRepoDep) -> DeletePostResponse:
    """
    Delete a post.

    Raises
    ------
    NotFoundError
        If no post has this ID.
    """
    db_post = await repo.delete(post_id)
    if not db_post:
        raise NotFoundError
    logger.info(f"Post deleted: {db_post.id}")
    return DeletePostResponse(deleted_post=db_post_to_response(db_post))
