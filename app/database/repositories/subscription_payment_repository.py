"""
Repository for SubscriptionPayment database operations.

A payment is created PENDING and finalized once, either as SUCCESS or FAILED.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.database.models.subscription_payment import SubscriptionPayment
from app.database.repositories.repository import BaseRepository
from app.utils.enums import PaymentStatus


class SubscriptionPaymentRepository(BaseRepository[SubscriptionPayment]):
    """Handles database operations for subscription payments."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, SubscriptionPayment)

    async def create_pending(
        self, subscription_id: int, amount: Decimal, payment_date: datetime
    ) -> SubscriptionPayment:
        """Create the audit record of a billing attempt before any external call."""
        return await self.create(
            subscription_id=subscription_id,
            amount=amount,
            payment_date=payment_date,
            status=PaymentStatus.PENDING,
        )

    async def mark_success(
        self, payment_id: int, transaction_hash: Optional[str]
    ) -> Optional[SubscriptionPayment]:
        return await self.update(
            payment_id,
            status=PaymentStatus.SUCCESS,
            transaction_hash=transaction_hash,
        )

    async def mark_failed(
        self, payment_id: int, failure_code: str, failure_reason: str
    ) -> Optional[SubscriptionPayment]:
        return await self.update(
            payment_id,
            status=PaymentStatus.FAILED,
            failure_code=failure_code,
            failure_reason=failure_reason,
        )
