"""Repository layer for database operations."""

from app.repositories.post import PostRepository

__all__ = ["PostRepository"]
