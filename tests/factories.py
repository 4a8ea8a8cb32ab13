"""Test data builders and collaborator fakes shared by the test modules."""

import asyncio
from datetime import datetime
from typing import Dict, List, Optional, Union

from sqlalchemy import select

from app.database.models.subscription import Subscription
from app.database.models.subscription_payment import SubscriptionPayment
from app.database.models.user import User
from app.database.models.wallet import Wallet
from app.database.session import session_scope
from app.payments.base import (
    LAMPORTS_PER_SOL,
    Portfolio,
    TransferData,
    TransferExecutor,
    TransferResult,
    WalletAssetsProvider,
)

CRON_SECRET = "test-cron-secret"
RECEIVE_WALLET = "EAPReceive1111111111111111111111111111111111"

RICH = 5 * LAMPORTS_PER_SOL
POOR = LAMPORTS_PER_SOL // 100  # 0.01 SOL, below the 0.1 SOL price


class FakeWalletAssets(WalletAssetsProvider):
    """Portfolio lookup backed by a dict of public_key -> lamports."""

    def __init__(self):
        self.balances: Dict[str, int] = {}
        self.errors: Dict[str, BaseException] = {}
        self.calls: List[str] = []

    async def search_wallet_assets(self, owner: str) -> Portfolio:
        self.calls.append(owner)
        if owner in self.errors:
            raise self.errors[owner]
        return Portfolio(owner=owner, native_lamports=self.balances.get(owner, 0))


class FakeTransferExecutor(TransferExecutor):
    """Succeeds with signature `sig-<wallet_id>` unless an outcome is configured."""

    def __init__(self):
        self.outcomes: Dict[int, Union[TransferResult, BaseException, None]] = {}
        self.calls: List[dict] = []

    async def transfer_token(
        self,
        user_id: int,
        wallet_id: int,
        receiver_address: str,
        token_address: str,
        amount: float,
        token_symbol: str,
    ) -> Optional[TransferResult]:
        self.calls.append({
            "user_id": user_id,
            "wallet_id": wallet_id,
            "receiver_address": receiver_address,
            "token_address": token_address,
            "amount": amount,
            "token_symbol": token_symbol,
        })
        if wallet_id in self.outcomes:
            outcome = self.outcomes[wallet_id]
            if isinstance(outcome, BaseException):
                raise outcome
            return outcome
        return TransferResult(success=True, data=TransferData(signature=f"sig-{wallet_id}"))


def run(coro):
    return asyncio.run(coro)


def naive(value: datetime) -> datetime:
    """SQLite drops tzinfo; compare everything as naive UTC."""
    return value.replace(tzinfo=None)


async def create_user(auth_provider_id: str, wallets: Optional[List[dict]] = None) -> dict:
    """Create a user plus wallets ({public_key, active}); returns ids."""
    async with session_scope() as db:
        user = User(auth_provider_id=auth_provider_id, email=f"{auth_provider_id}@eap.local")
        db.add(user)
        await db.flush()
        wallet_ids = []
        for spec in wallets or []:
            wallet = Wallet(
                user_id=user.id,
                public_key=spec["public_key"],
                active=spec.get("active", True),
            )
            db.add(wallet)
            await db.flush()
            wallet_ids.append(wallet.id)
        return {"user_id": user.id, "wallet_ids": wallet_ids}


async def create_subscription(
    user_id: int,
    next_payment_date: datetime,
    active: bool = True,
    end_date: Optional[datetime] = None,
) -> int:
    async with session_scope() as db:
        subscription = Subscription(
            user_id=user_id,
            active=active,
            start_date=next_payment_date,
            next_payment_date=next_payment_date,
            end_date=end_date,
        )
        db.add(subscription)
        await db.flush()
        return subscription.id


async def get_subscription(subscription_id: int) -> Subscription:
    async with session_scope() as db:
        return await db.get(Subscription, subscription_id)


async def get_payments(subscription_id: Optional[int] = None) -> List[SubscriptionPayment]:
    async with session_scope() as db:
        query = select(SubscriptionPayment).order_by(SubscriptionPayment.id)
        if subscription_id is not None:
            query = query.where(SubscriptionPayment.subscription_id == subscription_id)
        result = await db.execute(query)
        return list(result.scalars().all())
