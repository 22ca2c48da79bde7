"""Post repository for database operations."""

from json import dumps
from logging import getLogger
from uuid import UUID

from sqlalchemy import ColumnElement, String, cast, desc, or_, select
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession

from app.configs import file_logger, settings
from app.errors.database import DuplicateEntryError, StorageError
from app.models.post import PostDB
from app.repositories.base import BaseRepository
from app.schemas.post import PostInput
from app.utils.helpers import utc_now
from app.utils.slug import base_slug, slug_candidates

logger = file_logger(getLogger(__name__))


class PostRepository(BaseRepository[PostDB]):
    """
    Repository for Post database operations.

    Assigns slugs before every insert and every title change. The probe is
    not atomic against concurrent writers; the unique index on ``slug`` is
    the backstop, and a rejected write is retried with a freshly probed slug
    up to ``max_slug_retries`` times.
    """

    model = PostDB
    unique_fields = ("slug",)

    def __init__(self, session: AsyncSession, max_slug_retries: int | None = None) -> None:
        super().__init__(session)
        self.max_slug_retries = (
            settings.SLUG_MAX_RETRIES if max_slug_retries is None else max_slug_retries
        )

    async def assign_slug(self, title: str, exclude_id: UUID | None = None) -> str:
        """
        Find the first free slug for a title.

        Probes ``base``, ``base-1``, ``base-2`` ... and returns the lowest
        candidate no other post uses.

        Args:
            title: Post title
            exclude_id: Post being updated, ignored during the probe

        Returns:
            str: Free slug
        """
        candidates = slug_candidates(base_slug(title))
        slug = next(candidates)
        while await self._check_exists_by_field("slug", slug, exclude_id=exclude_id):
            slug = next(candidates)
        return slug

    async def create(self, post_in: PostInput) -> PostDB:
        """
        Create a new post.

        Args:
            post_in: Validated post fields

        Returns:
            PostDB: Created post

        Raises:
            StorageError: If no unique slug could be stored or the write failed
        """
        for attempt in range(1, self.max_slug_retries + 1):
            now = utc_now()
            slug = await self.assign_slug(post_in.title)
            db_post = PostDB(
                **post_in.model_dump(),
                slug=slug,
                created_at=now,
                updated_at=now,
            )
            try:
                return await self._add_and_refresh(db_post)
            except DuplicateEntryError as e:
                self._raise_unless_slug_conflict(e, slug, attempt)

        raise StorageError(
            detail=f"Could not store a unique slug for '{post_in.title}' "
            f"after {self.max_slug_retries} attempts",
        )

    async def update(self, post_id: UUID, post_in: PostInput) -> PostDB | None:
        """
        Update a post.

        ``title``, ``content`` and ``tags`` are replaced; ``excerpt`` and
        ``cover_image`` only when they were sent. The slug is recomputed only
        when the title changes.

        Args:
            post_id: Post UUID
            post_in: Validated post fields

        Returns:
            PostDB | None: Updated post if found, None otherwise

        Raises:
            StorageError: If no unique slug could be stored or the write failed
        """
        for attempt in range(1, self.max_slug_retries + 1):
            db_post = await self.get_by_id(post_id)
            if not db_post:
                return None

            update_data = post_in.model_dump(exclude_unset=True)
            if db_post.title != post_in.title:
                update_data["slug"] = await self.assign_slug(post_in.title, exclude_id=post_id)
            update_data["updated_at"] = utc_now()
            slug = update_data.get("slug", db_post.slug)

            for key, value in update_data.items():
                setattr(db_post, key, value)

            try:
                return await self._add_and_refresh(db_post)
            except DuplicateEntryError as e:
                self._raise_unless_slug_conflict(e, slug, attempt)

        raise StorageError(
            detail=f"Could not store a unique slug for post {post_id} "
            f"after {self.max_slug_retries} attempts",
        )

    async def list_posts(
        self,
        skip: int = 0,
        limit: int = 10,
        search: str | None = None,
        tag: str | None = None,
    ) -> tuple[list[PostDB], int]:
        """
        Get one page of posts, newest first, with the total match count.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return
            search: Case-insensitive text matched against title and content
            tag: Only posts carrying this exact tag

        Returns:
            tuple[list[PostDB], int]: Page of posts and total matches
        """
        filters = self._filters(search, tag)
        query = (
            select(PostDB)
            .where(*filters)
            # pyrefly: ignore [bad-argument-type]
            .order_by(desc(PostDB.created_at))
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(query)
        posts = list(result.scalars().all())
        total = await self.count(*filters)
        return posts, total

    def _filters(self, search: str | None, tag: str | None) -> list[ColumnElement[bool]]:
        filters: list[ColumnElement[bool]] = []
        if search:
            filters.append(
                or_(
                    # pyrefly: ignore [missing-attribute]
                    PostDB.title.icontains(search, autoescape=True),
                    # pyrefly: ignore [missing-attribute]
                    PostDB.content.icontains(search, autoescape=True),
                ),
            )
        if tag:
            filters.append(self._tag_filter(tag))
        return filters

    def _tag_filter(self, tag: str) -> ColumnElement[bool]:
        """Match posts whose tag list contains ``tag``, using JSONB containment when available."""
        if self.session.bind is not None and self.session.bind.dialect.name == "postgresql":
            # pyrefly: ignore [missing-attribute]
            return PostDB.tags.cast(JSONB).contains([tag])
        # Other backends store the list as JSON text
        return cast(PostDB.tags, String).contains(dumps(tag), autoescape=True)

    def _raise_unless_slug_conflict(
        self,
        error: DuplicateEntryError,
        slug: str,
        attempt: int,
    ) -> None:
        if error.field != "slug":
            raise StorageError(detail=error.detail) from error
        logger.warning(
            f"Slug '{slug}' was taken by a concurrent write, "
            f"retrying ({attempt}/{self.max_slug_retries})",
        )
