# app/dependencies/__init__.py

from app.dependencies.dependencies import (
    PostIdDep,
    PostListQuery,
    PostListQueryDep,
    PostRepoDep,
    get_post_id,
    get_post_list_query,
    get_post_repository,
)

__all__ = [
    "PostIdDep",
    "PostListQuery",
    "PostListQueryDep",
    "PostRepoDep",
    "get_post_id",
    "get_post_list_query",
    "get_post_repository",
]
