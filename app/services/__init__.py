from app.services.validation import validate_post

__all__ = ["validate_post"]
