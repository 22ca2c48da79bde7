"""Database models for the application."""

from app.models.post import PostDB

__all__ = ["PostDB"]
