"""Subscription model - recurring monthly EAP subscription."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database.models.model_base import SqlAlchemyModel


class Subscription(SqlAlchemyModel):
    __tablename__ = "subscriptions"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
        index=True,
    )
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=func.now(),
        nullable=False,
    )
    next_payment_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    # Set when the user cancels; the subscription stays usable until then
    end_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    user = relationship("User", back_populates="subscriptions")
    payments: Mapped[List["SubscriptionPayment"]] = relationship(
        "SubscriptionPayment",
        back_populates="subscription",
        order_by="SubscriptionPayment.id",
    )

    def __repr__(self) -> str:
        return f"<Subscription id={self.id} user_id={self.user_id} active={self.active}>"
