# tests/services/test_validation.py
"""Tests for app/services/validation.py module."""

import pytest

from app.errors import ValidationError
from app.schemas import PostPayload
from app.schemas.post import is_image_url, normalize_tags
from app.services.validation import validate_post

VALID_CONTENT = "Exactly ten and then some."


def payload(**fields: object) -> PostPayload:
    data: dict[str, object] = {"title": "Hello World", "content": VALID_CONTENT}
    data.update(fields)
    return PostPayload.model_validate(data)


class TestNormalizeTags:
    """Tests for tag normalization."""

    def test_comma_separated_string(self) -> None:
        assert normalize_tags("a, b ,, c") == ["a", "b", "c"]

    def test_list(self) -> None:
        assert normalize_tags(["a", "", "b "]) == ["a", "b"]

    def test_order_kept_and_duplicates_not_removed(self) -> None:
        assert normalize_tags(["z", "a", "z"]) == ["z", "a", "z"]

    @pytest.mark.parametrize("tags", [None, "", [], " , , "])
    def test_empty_inputs(self, tags: list[str] | str | None) -> None:
        assert normalize_tags(tags) == []


class TestIsImageUrl:
    """Tests for the cover image URL pattern."""

    @pytest.mark.parametrize(
        "url",
        [
            "http://x.com/img.PNG",
            "https://cdn.example.com/a/b/cover.jpeg",
            "https://example.com/pic.webp",
            "http://example.com/anim.GiF",
        ],
    )
    def test_accepted(self, url: str) -> None:
        assert is_image_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            "http://x.com/img.bmp",
            "ftp://x.com/img.png",
            "https://x.com/img.png?size=large",
            "x.com/img.png",
            "http://.png",
        ],
    )
    def test_rejected(self, url: str) -> None:
        assert not is_image_url(url)


class TestValidatePost:
    """Tests for validate_post."""

    def test_trims_fields(self) -> None:
        post = validate_post(payload(title="  Hello World  ", content=f"  {VALID_CONTENT}  "))
        assert post.title == "Hello World"
        assert post.content == VALID_CONTENT

    def test_idempotent(self) -> None:
        first = validate_post(payload(title="  Hello  ", content=f" {VALID_CONTENT} ", tags="a, b"))
        second = validate_post(payload(**first.model_dump()))
        assert second.model_dump() == first.model_dump()

    def test_title_boundaries(self) -> None:
        assert validate_post(payload(title="abc")).title == "abc"
        with pytest.raises(ValidationError) as exc_info:
            validate_post(payload(title="ab"))
        assert exc_info.value.errors == ["Title must be at least 3 characters long"]

    def test_title_too_long(self) -> None:
        assert validate_post(payload(title="t" * 200)).title == "t" * 200
        with pytest.raises(ValidationError) as exc_info:
            validate_post(payload(title="t" * 201))
        assert exc_info.value.errors == ["Title cannot exceed 200 characters"]

    def test_content_boundaries(self) -> None:
        assert validate_post(payload(content="0123456789")).content == "0123456789"
        with pytest.raises(ValidationError) as exc_info:
            validate_post(payload(content="012345678"))
        assert exc_info.value.errors == ["Content must be at least 10 characters long"]

    def test_whitespace_padding_does_not_count(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_post(payload(title="  ab  ", content="   012345678   "))
        assert exc_info.value.errors == [
            "Title must be at least 3 characters long",
            "Content must be at least 10 characters long",
        ]

    def test_missing_required_fields(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_post(PostPayload())
        error = exc_info.value
        assert error.errors == ["Title is required", "Content is required"]
        assert error.detail == "Title is required, Content is required"
        assert error.status_code == 400

    def test_empty_strings_are_missing(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_post(payload(title="", content=""))
        assert exc_info.value.errors == ["Title is required", "Content is required"]

    def test_excerpt_limit(self) -> None:
        assert validate_post(payload(excerpt="e" * 500)).excerpt == "e" * 500
        with pytest.raises(ValidationError) as exc_info:
            validate_post(payload(excerpt="e" * 501))
        assert exc_info.value.errors == ["Excerpt cannot exceed 500 characters"]

    def test_cover_image(self) -> None:
        post = validate_post(payload(coverImage=" http://x.com/img.PNG "))
        assert post.cover_image == "http://x.com/img.PNG"
        with pytest.raises(ValidationError) as exc_info:
            validate_post(payload(coverImage="http://x.com/img.bmp"))
        assert exc_info.value.errors == [
            "Cover image must be a valid image URL (jpg, jpeg, png, gif, webp)",
        ]

    def test_empty_optional_fields_become_none(self) -> None:
        post = validate_post(payload(excerpt="   ", coverImage=""))
        assert post.excerpt is None
        assert post.cover_image is None
        assert {"excerpt", "cover_image"} <= post.model_fields_set

    def test_absent_optional_fields_are_unset(self) -> None:
        post = validate_post(payload())
        assert "excerpt" not in post.model_fields_set
        assert "cover_image" not in post.model_fields_set

    def test_tags_normalized(self) -> None:
        assert validate_post(payload(tags="a, b ,, c")).tags == ["a", "b", "c"]
        assert validate_post(payload(tags=["a", "", "b "])).tags == ["a", "b"]

    def test_tag_too_long(self) -> None:
        assert validate_post(payload(tags=["t" * 50])).tags == ["t" * 50]
        with pytest.raises(ValidationError) as exc_info:
            validate_post(payload(tags=["ok", "t" * 51]))
        assert exc_info.value.errors == ["Each tag cannot exceed 50 characters"]

    def test_all_violations_reported(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_post(
                payload(
                    title="ab",
                    content="short",
                    excerpt="e" * 501,
                    coverImage="not-a-url",
                    tags=["t" * 51],
                ),
            )
        assert len(exc_info.value.errors) == 5
        assert exc_info.value.detail == ", ".join(exc_info.value.errors)
