"""
Base CRUD operations for SQLAlchemy models.

Provides the generic create operation inherited and extended
by model-specific CRUD classes. Owner scoping lives in the subclasses.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from ragchat.boundary.db.base import Base

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

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Create a new record in the database.

        Flushes so generated keys and defaults are populated; the caller
        decides when to commit.

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

