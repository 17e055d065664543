"""
Base CRUD operations for SQLAlchemy models.

Provides generic Create, Read, Update, Delete operations that can be
inherited and extended by model-specific CRUD classes. Reads and writes
accept arbitrary WHERE criteria so subclasses can scope every call.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

from helios.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic base class for CRUD operations.

    Type Parameters:
        ModelT: SQLAlchemy model class inheriting from Base

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        """
        Initialize CRUD with target model.

        Args:
            model: SQLAlchemy model class for database operations
        """
        self.model = model

    async def create(self, session: AsyncSession, **kwargs: Any) -> ModelT:
        """
        Create a new record in the database.

        Args:
            session: Async database session
            **kwargs: Model field values

        Returns:
            Created model instance with generated ID and timestamps
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_one(
        self,
        session: AsyncSession,
        *criteria: ColumnElement[bool],
    ) -> ModelT | None:
        """
        Retrieve a single record matching all criteria.

        Args:
            session: Async database session
            *criteria: SQLAlchemy boolean expressions

        Returns:
            Model instance if found, None otherwise
        """
        stmt = select(self.model).where(*criteria)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_many(
        self,
        session: AsyncSession,
        *criteria: ColumnElement[bool],
        order_by: Any = None,
        options: Sequence[ORMOption] = (),
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ModelT]:
        """
        Retrieve records matching all criteria with optional pagination.

        Args:
            session: Async database session
            *criteria: SQLAlchemy boolean expressions
            order_by: Ordering clause
            options: Loader options (e.g. deferred columns)
            limit: Maximum number of records to return (None for all)
            offset: Number of records to skip

        Returns:
            Sequence of model instances
        """
        stmt = select(self.model).where(*criteria).options(*options).offset(offset)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def update_where(
        self,
        session: AsyncSession,
        *criteria: ColumnElement[bool],
        **values: Any,
    ) -> ModelT | None:
        """
        Update the record matching all criteria.

        Args:
            session: Async database session
            *criteria: SQLAlchemy boolean expressions
            **values: Fields to update with new values

        Returns:
            Updated model instance if found, None otherwise
        """
        stmt = (
            update(self.model)
            .where(*criteria)
            .values(**values)
            .returning(self.model)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_where(
        self,
        session: AsyncSession,
        *criteria: ColumnElement[bool],
    ) -> bool:
        """
        Delete records matching all criteria.

        Args:
            session: Async database session
            *criteria: SQLAlchemy boolean expressions

        Returns:
            True if a record was deleted, False if none matched
        """
        stmt = delete(self.model).where(*criteria)
        result = await session.execute(stmt)
        return result.rowcount > 0
