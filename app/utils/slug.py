"""
Slug helpers.

A slug is the URL-safe, human-readable identifier of a post. The base slug
is derived from the title; uniqueness is resolved by probing ``base``,
``base-1``, ``base-2`` ... against the store (see ``PostRepository``).
"""

from collections.abc import Iterator
from itertools import count

from slugify import slugify

from app.configs.settings import SLUG_MAX_LENGTH

FALLBACK_SLUG = "post"


def base_slug(title: str, max_length: int = SLUG_MAX_LENGTH) -> str:
    """
    Derive the base slug from a post title.

    Lowercases, transliterates diacritics, drops punctuation and collapses
    every run of non-alphanumeric characters into one hyphen.

    Args:
        title: Post title.
        max_length: Maximum slug length (cut on the last full character).

    Returns:
        str: Base slug, ``"post"`` when the title has nothing sluggable.

    Examples:
    --------
    >>> base_slug("Hello, World!")
    'hello-world'
    >>> base_slug("Crème Brûlée")
    'creme-brulee'
    """
    slug = slugify(title, max_length=max_length, lowercase=True)
    return slug or FALLBACK_SLUG


def slug_candidates(base: str) -> Iterator[str]:
    """Yield ``base`` then ``base-1``, ``base-2`` ... in order."""
    yield base
    for suffix in count(1):
        yield f"{base}-{suffix}"
