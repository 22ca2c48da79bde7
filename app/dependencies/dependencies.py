# app/dependencies/dependencies.py

"""Application dependencies for the posts API."""

from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.configs import settings
from app.configs.settings import MAX_PAGE_NUMBER
from app.db import get_session
from app.errors.posts import MalformedIdError
from app.repositories import PostRepository


def get_post_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PostRepository:
    """
    Resolve the `PostRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    PostRepository
        Repository instance bound to the session.
    """
    return PostRepository(session)


PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]


def get_post_id(
    post_id: Annotated[str, Path(description="Post UUID")],
) -> UUID:
    """
    Parse the post ID path parameter.

    Raises
    ------
    MalformedIdError
        If the value is not a UUID.
    """
    try:
        return UUID(post_id)
    except ValueError as e:
        raise MalformedIdError from e


PostIdDep = Annotated[UUID, Depends(get_post_id)]


@dataclass(frozen=True)
class PostListQuery:
    """
    Query container for post listing.

    Parameters
    ----------
    page : int
        1-based page number.
    limit : int
        Page size, already clamped to ``MAX_PAGE_LIMIT``.
    search : str | None
        Optional text matched against title and content.
    tag : str | None
        Optional single-tag filter.
    """

    page: int = 1
    limit: int = 10
    search: str | None = None
    tag: str | None = None

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def get_post_list_query(
    page: Annotated[
        int,
        Query(ge=1, le=MAX_PAGE_NUMBER, description="Page number (1-based)"),
    ] = 1,
    limit: Annotated[
        int,
        Query(ge=1, description=f"Page size (capped at {settings.MAX_PAGE_LIMIT})"),
    ] = settings.DEFAULT_PAGE_LIMIT,
    search: Annotated[
        str | None,
        Query(description="Free-text search over title and content"),
    ] = None,
    tag: Annotated[str | None, Query(description="Only posts with this tag")] = None,
) -> PostListQuery:
    """
    Dependency to construct `PostListQuery` from query parameters.

    Non-numeric, non-positive or oversized ``page`` and non-positive
    ``limit`` values are rejected by FastAPI before this runs; ``limit``
    above the maximum is clamped.

    Returns
    -------
    PostListQuery
        Aggregated query parameters object.
    """
    return PostListQuery(
        page=page,
        limit=min(limit, settings.MAX_PAGE_LIMIT),
        search=(search or "").strip() or None,
        tag=(tag or "").strip() or None,
    )


PostListQueryDep = Annotated[PostListQuery, Depends(get_post_list_query)]
