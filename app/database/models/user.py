"""User model - account owner synced from the external auth provider."""

from typing import List, Optional

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database.models.model_base import SqlAlchemyModel


class User(SqlAlchemyModel):
    __tablename__ = "users"

    auth_provider_id: Mapped[str] = mapped_column(
        String(128),
        unique=True,
        nullable=False,
        index=True,
    )

    email: Mapped[Optional[str]] = mapped_column(String(255), index=True)

    display_name: Mapped[Optional[str]] = mapped_column(String(255))

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    wallets: Mapped[List["Wallet"]] = relationship(
        "Wallet",
        back_populates="user",
        order_by="Wallet.id",
    )
    subscriptions: Mapped[List["Subscription"]] = relationship(
        "Subscription",
        back_populates="user",
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} auth_provider_id={self.auth_provider_id}>"
