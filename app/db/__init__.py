"""Database engine and session management."""

from app.db.database import Database, engine_kwargs, get_session

__all__ = ["Database", "engine_kwargs", "get_session"]
