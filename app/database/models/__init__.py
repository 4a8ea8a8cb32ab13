"""Database models package - import all models so Alembic can discover them."""

from app.database.models.model_base import SqlAlchemyModel
from app.database.models.user import User
from app.database.models.wallet import Wallet
from app.database.models.subscription import Subscription
from app.database.models.subscription_payment import SubscriptionPayment

__all__ = [
    "SqlAlchemyModel",
    "User",
    "Wallet",
    "Subscription",
    "SubscriptionPayment",
]
