"""
Repository for Subscription database operations.
"""
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.database.models.subscription import Subscription
from app.database.models.user import User
from app.database.repositories.repository import BaseRepository


class SubscriptionRepository(BaseRepository[Subscription]):
    """Handles database operations for subscriptions."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Subscription)

    async def find_due_for_payment(self, now: datetime) -> List[Subscription]:
        """Active subscriptions whose next payment date has elapsed, with user wallets loaded."""
        result = await self.session.execute(
            select(Subscription)
            .where(
                Subscription.active == True,  # noqa: E712
                Subscription.next_payment_date <= now,
            )
            .options(selectinload(Subscription.user).selectinload(User.wallets))
            .order_by(Subscription.id)
        )
        return list(result.scalars().all())

    async def find_expired(self, now: datetime) -> List[Subscription]:
        """Active subscriptions whose end date has elapsed."""
        result = await self.session.execute(
            select(Subscription)
            .where(
                Subscription.active == True,  # noqa: E712
                Subscription.end_date.is_not(None),
                Subscription.end_date <= now,
            )
            .order_by(Subscription.id)
        )
        return list(result.scalars().all())

    async def deactivate(self, subscription_id: int) -> Optional[Subscription]:
        """Mark subscription inactive."""
        return await self.update(subscription_id, active=False)

    async def set_next_payment_date(
        self, subscription_id: int, next_payment_date: datetime
    ) -> Optional[Subscription]:
        """Move the billing date of an active subscription."""
        return await self.update(subscription_id, next_payment_date=next_payment_date)
