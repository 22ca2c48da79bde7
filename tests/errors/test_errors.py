# tests/errors/test_errors.py
"""Tests for app/errors module."""

from logging import getLogger
from unittest.mock import MagicMock

import orjson
import pytest

from app.errors import (
    BaseAppError,
    DatabaseInitializationError,
    DuplicateEntryError,
    MalformedIdError,
    NotFoundError,
    StorageError,
    ValidationError,
    create_exception_handler,
    storage_exception_handler,
)


@pytest.fixture
def request_mock() -> MagicMock:
    request = MagicMock()
    request.client.host = "127.0.0.1"
    request.headers = {}
    request.method = "GET"
    request.url.path = "/posts"
    return request


def test_base_error_defaults() -> None:
    error = BaseAppError()
    assert error.status_code == 500
    assert str(error) == "Internal Server Error"


@pytest.mark.parametrize(
    ("error", "status_code", "detail"),
    [
        (NotFoundError(), 404, "Post not found"),
        (MalformedIdError(), 400, "Invalid post ID"),
        (StorageError(), 500, "Database Error"),
        (DatabaseInitializationError(), 500, "Failed to initialize database"),
        (DuplicateEntryError(field="slug"), 409, "A record with this value already exists"),
    ],
)
def test_error_status_and_detail(error: BaseAppError, status_code: int, detail: str) -> None:
    assert error.status_code == status_code
    assert error.detail == detail


def test_storage_errors_share_a_base() -> None:
    assert isinstance(DuplicateEntryError(), StorageError)
    assert isinstance(DatabaseInitializationError(), StorageError)


def test_validation_error_joins_messages() -> None:
    error = ValidationError(["Title is required", "Content is required"])
    assert error.status_code == 400
    assert error.detail == "Title is required, Content is required"
    assert error.errors == ["Title is required", "Content is required"]


@pytest.mark.asyncio
async def test_handler_includes_extra_attributes(request_mock: MagicMock) -> None:
    handler = create_exception_handler(getLogger(__name__))

    response = await handler(request_mock, ValidationError(["Title is required"]))

    assert response.status_code == 400
    assert orjson.loads(response.body) == {
        "detail": "Title is required",
        "errors": ["Title is required"],
    }


@pytest.mark.asyncio
async def test_handler_without_extras(request_mock: MagicMock) -> None:
    handler = create_exception_handler(getLogger(__name__))

    response = await handler(request_mock, NotFoundError())

    assert response.status_code == 404
    assert orjson.loads(response.body) == {"detail": "Post not found"}


@pytest.mark.asyncio
async def test_storage_handler_hides_detail(request_mock: MagicMock) -> None:
    response = await storage_exception_handler(
        request_mock,
        StorageError(detail="password authentication failed for user app"),
    )

    assert response.status_code == 500
    assert orjson.loads(response.body) == {"detail": "An unexpected server error occurred."}


def test_to_content_only_sends_public_fields() -> None:
    assert ValidationError(["Title is required"]).to_content() == {
        "detail": "Title is required",
        "errors": ["Title is required"],
    }
    assert DuplicateEntryError(field="slug").to_content() == {
        "detail": "A record with this value already exists",
    }


@pytest.mark.asyncio
async def test_handler_answers_foreign_exceptions_with_500(request_mock: MagicMock) -> None:
    handler = create_exception_handler(getLogger(__name__))

    response = await handler(request_mock, RuntimeError("internal state"))

    assert response.status_code == 500
    assert orjson.loads(response.body) == {"detail": "Internal Server Error"}
