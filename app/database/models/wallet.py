"""Wallet model - on-chain wallet owned by a user."""

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database.models.model_base import SqlAlchemyModel
from app.utils.enums import WalletChain


class Wallet(SqlAlchemyModel):
    __tablename__ = "wallets"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, default="Wallet")
    public_key: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    chain: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=WalletChain.SOLANA,
    )
    active: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    user = relationship("User", back_populates="wallets")

    def __repr__(self) -> str:
        return f"<Wallet id={self.id} user_id={self.user_id} active={self.active}>"
