"""
Repository Pattern Base Classes

Provides the async database abstraction layer for the billing backend.

The Repository Pattern provides several benefits:
1. Decouples billing logic from database implementation
2. Makes testing easier (can swap the session factory or mock repositories)
3. Centralizes database queries and logic

Architecture:
- BaseRepository: Generic CRUD operations for any model
- Specialized repositories: Domain-specific queries (SubscriptionRepository,
  SubscriptionPaymentRepository)

Writes only flush. The caller owns the transaction: `session_scope()` commits
once when the block exits and rolls every write back if it raises.
"""

from abc import ABC
from typing import Any, Generic, Optional, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from app.database.models.model_base import SqlAlchemyModel


ModelType = TypeVar("ModelType", bound=SqlAlchemyModel)


class BaseRepository(Generic[ModelType], ABC):
    """
    Abstract base repository with common CRUD operations.

    Type Parameters:
        ModelType: The SQLAlchemy model class (Subscription, SubscriptionPayment, etc.)

    Example:
        class SubscriptionRepository(BaseRepository[Subscription]):
            def __init__(self, session: AsyncSession):
                super().__init__(session, Subscription)
    """

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
            model: The SQLAlchemy model class
        """
        self.session = session
        self.model = model

    async def get_by_id(self, id: Any) -> Optional[ModelType]:
        """
        Retrieve a single record by ID.

        Args:
            id: Primary key value

        Returns:
            Model instance or None if not found
        """
        return await self.session.get(self.model, id)

    async def create(self, **kwargs) -> ModelType:
        """
        Create a new record.

        Args:
            **kwargs: Column values for the new record

        Returns:
            Created model instance
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, id: Any, **kwargs) -> Optional[ModelType]:
        """
        Update an existing record.

        Args:
            id: Primary key value
            **kwargs: Column values to update

        Returns:
            Updated model instance or None if not found
        """
        instance = await self.get_by_id(id)
        if instance is None:
            return None

        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance
