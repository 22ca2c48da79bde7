"""
Post validation.

Runs on every create and update request before anything reaches the store.
The field rules live on ``PostInput``; this module turns pydantic's report
into the API's ``ValidationError`` so the client sees one message per
invalid field instead of only the first.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from app.errors.validation import ValidationError
from app.schemas.post import PostInput, PostPayload

# Optional fields that an update only touches when present in the body
OPTIONAL_FIELDS = frozenset({"excerpt", "cover_image"})


def validate_post(payload: PostPayload) -> PostInput:
    """
    Validate and normalize a create/update request body.

    Args:
        payload: Raw request body.

    Returns:
        PostInput: Trimmed fields with normalized tags. ``excerpt`` and
        ``cover_image`` are only marked as set when the body carried them.

    Raises:
        ValidationError: One message per violated field.
    """
    fields = {"title", "content", "tags"} | (payload.model_fields_set & OPTIONAL_FIELDS)
    data: dict[str, Any] = payload.model_dump(include=fields)
    try:
        return PostInput.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError([error["msg"] for error in e.errors()]) from e
