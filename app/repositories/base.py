"""Base repository for database operations."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from app.errors.database import DuplicateEntryError, StorageError

type FilterValue = str | int | float | bool | UUID | datetime | None


class BaseRepository[ModelT: SQLModel]:
    """
    Base repository implementing common CRUD operations.

    This class provides a generic implementation of database operations
    that can be extended by specific entity repositories.

    Attributes:
        model: The SQLModel database model type.
        id_field: The name of the primary key field (default: "id").
        unique_fields: Columns guarded by a unique constraint, used to tell
            which field a duplicate-entry error is about.
    """

    model: type[ModelT]
    id_field: str = "id"
    unique_fields: tuple[str, ...] = ()

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def get_by_id(self, record_id: UUID) -> ModelT | None:
        """
        Get a record by its ID.

        Args:
            record_id: Record UUID

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        id_column = getattr(self.model, self.id_field)
        statement = select(self.model).where(id_column == record_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def delete(self, record_id: UUID) -> ModelT | None:
        """
        Delete a record by ID.

        Args:
            record_id: Record UUID

        Returns:
            ModelT | None: The deleted record, None if not found
        """
        record = await self.get_by_id(record_id)
        if not record:
            return None

        await self.session.delete(record)
        await self.session.flush()
        return record

    async def count(self, *filters: ColumnElement[bool]) -> int:
        """
        Count records matching optional filters.

        Args:
            *filters: SQLAlchemy where-clauses

        Returns:
            int: Number of matching records
        """
        statement = select(func.count()).select_from(self.model).where(*filters)
        result = await self.session.execute(statement)
        count = result.scalar()
        return count if count is not None else 0

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record and refresh it from the database with error handling.

        Args:
            record: Record to add

        Returns:
            ModelT: Refreshed record

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            StorageError: For other database errors
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
            return record
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            if "unique" in error_msg.lower() or "duplicate" in error_msg.lower():
                field = next((f for f in self.unique_fields if f in error_msg.lower()), None)
                raise DuplicateEntryError(detail=error_msg, field=field) from e
            raise StorageError(detail=f"Database integrity error: {error_msg}") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StorageError(detail=f"Failed to save record: {e}") from e

    async def _check_exists_by_field(
        self,
        field_name: str,
        value: FilterValue,
        exclude_id: UUID | None = None,
    ) -> bool:
        """
        Check if a record exists with a specific field value.

        Args:
            field_name: Name of the field to check
            value: Value to check for
            exclude_id: Optional ID to exclude from check (for updates)

        Returns:
            bool: True if record exists, False otherwise
        """
        field = getattr(self.model, field_name)
        statement = select(1).where(field == value)

        if exclude_id is not None:
            id_column = getattr(self.model, self.id_field)
            statement = statement.where(id_column != exclude_id)

        statement = statement.limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none() is not None
