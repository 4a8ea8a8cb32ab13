"""SubscriptionPayment model - one record per billing attempt."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database.models.model_base import SqlAlchemyModel
from app.utils.enums import PaymentStatus


class SubscriptionPayment(SqlAlchemyModel):
    __tablename__ = "subscription_payments"

    subscription_id: Mapped[int] = mapped_column(
        ForeignKey("subscriptions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    amount: Mapped[Decimal] = mapped_column(Numeric(18, 9), nullable=False)
    payment_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=PaymentStatus.PENDING,
        index=True,
    )  # PENDING, SUCCESS, FAILED
    transaction_hash: Mapped[Optional[str]] = mapped_column(String(128))
    failure_reason: Mapped[Optional[str]] = mapped_column(Text)
    failure_code: Mapped[Optional[str]] = mapped_column(String(40))

    subscription = relationship("Subscription", back_populates="payments")

    def __repr__(self) -> str:
        return (
            f"<SubscriptionPayment id={self.id} subscription_id={self.subscription_id} "
            f"status={self.status}>"
        )
