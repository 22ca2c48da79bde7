"""Utility helper functions."""

from app.utils.helpers import get_summary, host, page_count, today_str, utc_now
from app.utils.slug import base_slug, slug_candidates

__all__ = [
    "base_slug",
    "get_summary",
    "host",
    "page_count",
    "slug_candidates",
    "today_str",
    "utc_now",
]
