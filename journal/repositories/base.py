"""Base repository and pagination primitives."""

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from journal.errors.database import DatabaseError, DuplicateEntryError, RecordNotFoundError
from journal.utils.helpers import total_pages


@dataclass(frozen=True)
class PageParams:
    """
    1-indexed page request.

    Attributes:
        page: Page number, starting at 1.
        limit: Page size.
    """

    page: int = 1
    limit: int = 10

    def __post_init__(self) -> None:
        if self.page < 1 or self.limit < 1:
            mssg = "page and limit must be positive"
            raise ValueError(mssg)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Page[ItemT]:
    """
    One page of results plus the counts needed to navigate.

    ``total`` counts every matching row, independent of limit and offset.
    """

    items: list[ItemT] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.limit)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


class BaseRepository[ModelT: SQLModel]:
    """
    Base repository implementing common CRUD operations.

    Attributes:
        model: The SQLModel database model type.
        id_field: The name of the primary key field (default: "id").
    """

    model: type[ModelT]
    id_field: str = "id"

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def get_by_id(self, record_id: UUID | str) -> ModelT | None:
        """
        Get a record by its ID.

        Args:
            record_id: Record primary key

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        id_column = getattr(self.model, self.id_field)
        result = await self.session.execute(select(self.model).where(id_column == record_id))
        return result.scalar_one_or_none()

    async def get_or_raise(self, record_id: UUID | str) -> ModelT:
        """
        Get a record by ID or raise an exception if not found.

        Raises:
            RecordNotFoundError: If record is not found
        """
        record = await self.get_by_id(record_id)
        if record is None:
            raise RecordNotFoundError(detail=f"{self.label} not found")
        return record

    async def delete(self, record_id: UUID | str) -> bool:
        """
        Delete a record by ID.

        Returns:
            bool: True if record was deleted, False if not found
        """
        record = await self.get_by_id(record_id)
        if record is None:
            return False
        await self.session.delete(record)
        await self.session.flush()
        return True

    async def count(self) -> int:
        """Count total records."""
        result = await self.session.execute(select(func.count()).select_from(self.model))
        return result.scalar() or 0

    @property
    def label(self) -> str:
        """Human readable model name used in error messages."""
        return self.model.__name__.removesuffix("DB")

    async def _paginate(
        self,
        statement: Select[Any],
        params: PageParams,
        *,
        scalars: bool = True,
    ) -> tuple[list[Any], int]:
        """
        Run ``statement`` for one page and count all of its rows.

        The count wraps the unpaginated statement without ORDER BY, so it
        is independent of limit and offset. With ``scalars`` the first
        column of each row is returned, otherwise whole rows.
        """
        count_stmt = select(func.count()).select_from(statement.order_by(None).subquery())
        total = (await self.session.execute(count_stmt)).scalar() or 0
        result = await self.session.execute(statement.offset(params.offset).limit(params.limit))
        rows = result.scalars().all() if scalars else result.all()
        return list(rows), total

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record and refresh it from the database with error handling.

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            DatabaseError: For other database errors
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            if "unique" in error_msg.lower() or "duplicate" in error_msg.lower():
                raise DuplicateEntryError(detail=f"{self.label} already exists") from e
            raise DatabaseError(detail="Database integrity error") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseError(detail=f"Failed to save {self.label.lower()}") from e
        return record

    async def _check_exists_by_field(
        self,
        field_name: str,
        value: Any,
        exclude_id: UUID | str | None = None,
    ) -> bool:
        """
        Check if a record exists with a specific field value.

        Args:
            field_name: Name of the field to check
            value: Value to check for
            exclude_id: Optional ID to exclude from check (for updates)
        """
        column = getattr(self.model, field_name)
        statement = select(1).where(column == value)
        if exclude_id is not None:
            statement = statement.where(getattr(self.model, self.id_field) != exclude_id)
        result = await self.session.execute(statement.limit(1))
        return result.scalar_one_or_none() is not None
