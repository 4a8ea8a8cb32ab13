"""
Subscription Billing Service - recurring EAP subscription payments.

One run of the job:
1. For every active subscription whose next payment date has elapsed, attempt
   one billing cycle (PENDING payment -> wallet check -> balance check ->
   transfer -> SUCCESS, or FAILED + subscription deactivated).
2. After every payment attempt has settled, deactivate active subscriptions
   whose end date has elapsed.

Each subscription runs as its own asyncio task with its own database session.
Failures are recorded on the payment and never propagate to the batch.
A crash between creating the PENDING payment and finalizing it leaves the
payment PENDING; there is no reconciliation pass.
"""

import asyncio
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from app.database.models.subscription import Subscription
from app.database.models.wallet import Wallet
from app.database.repositories.subscription_payment_repository import SubscriptionPaymentRepository
from app.database.repositories.subscription_repository import SubscriptionRepository
from app.database.session import session_scope
from app.payments.base import SOL_MINT, SOL_SYMBOL, TransferExecutor, WalletAssetsProvider
from app.payments.errors import PaymentError, PaymentErrorCode, classify_payment_error
from app.payments.pricing import can_afford_subscription, get_sub_price, get_sub_price_float
from app.utils.dates import add_one_month

logger = logging.getLogger(__name__)

LOG_PREFIX = "[cron/subscription]"

# Never converted into a FAILED payment
_PASSTHROUGH = (asyncio.CancelledError, KeyboardInterrupt, SystemExit)


def _tag(subscription_id: int) -> str:
    return f"[cron/subscription:{subscription_id}]"


@dataclass
class BillingSummary:
    processed: int = 0
    succeeded: int = 0
    failed: int = 0
    cancelled: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def find_active_wallet(subscription: Subscription) -> Optional[Wallet]:
    """First active wallet of the subscription owner, if any."""
    user = subscription.user
    if user is None:
        return None
    return next((w for w in user.wallets if w.active), None)


class SubscriptionBillingService:
    """Runs billing cycles and cancellations against the database."""

    def __init__(
        self,
        wallet_assets: WalletAssetsProvider,
        transfer_executor: TransferExecutor,
        receive_wallet: str,
        session_factory: Callable = session_scope,
    ):
        self.wallet_assets = wallet_assets
        self.transfer_executor = transfer_executor
        self.receive_wallet = receive_wallet
        self.session_factory = session_factory

    async def run(self, now: Optional[datetime] = None) -> BillingSummary:
        """Payment pass, then cancellation pass, both against the same `now`."""
        now = now or datetime.now(timezone.utc)
        summary = await self.process_due_subscriptions(now)
        summary.cancelled = await self.cancel_expired_subscriptions(now)
        logger.info(
            f"{LOG_PREFIX} Done: processed={summary.processed} succeeded={summary.succeeded} "
            f"failed={summary.failed} cancelled={summary.cancelled}"
        )
        return summary

    # ── Payments ──

    async def process_due_subscriptions(self, now: datetime) -> BillingSummary:
        async with self.session_factory() as db:
            subscriptions = await SubscriptionRepository(db).find_due_for_payment(now)

        logger.info(f"{LOG_PREFIX} Fetched {len(subscriptions)} subscriptions to process")

        results = await asyncio.gather(
            *(self._process_subscription(s, now) for s in subscriptions),
            return_exceptions=True,
        )

        summary = BillingSummary(processed=len(subscriptions))
        for subscription, result in zip(subscriptions, results):
            if result is True:
                summary.succeeded += 1
            else:
                summary.failed += 1
                if isinstance(result, BaseException):
                    logger.error(
                        f"{_tag(subscription.id)} Billing cycle aborted: {result!r}"
                    )
        return summary

    async def _process_subscription(self, subscription: Subscription, now: datetime) -> bool:
        tag = _tag(subscription.id)
        logger.info(f"{tag} Processing subscription")

        async with self.session_factory() as db:
            payment = await SubscriptionPaymentRepository(db).create_pending(
                subscription_id=subscription.id,
                amount=get_sub_price(),
                payment_date=now,
            )

        try:
            await self._charge(subscription, payment.id)
        except _PASSTHROUGH:
            raise
        except BaseException as err:
            await self._fail(subscription.id, payment.id, err)
            return False
        return True

    async def _charge(self, subscription: Subscription, payment_id: int) -> None:
        tag = _tag(subscription.id)

        wallet = find_active_wallet(subscription)
        if wallet is None:
            raise PaymentError(PaymentErrorCode.BAD_WALLET, "User does not have an active wallet")

        portfolio = await self.wallet_assets.search_wallet_assets(wallet.public_key)
        if not can_afford_subscription(portfolio):
            raise PaymentError(PaymentErrorCode.INSUFFICIENT_BALANCE, "Insufficient balance")

        response = await self.transfer_executor.transfer_token(
            user_id=subscription.user_id,
            wallet_id=wallet.id,
            receiver_address=self.receive_wallet,
            token_address=SOL_MINT,
            amount=get_sub_price_float(),
            token_symbol=SOL_SYMBOL,
        )
        if response is None or not response.success or response.data is None:
            logger.error(
                f"{tag} Error in transfer_token: {response.error if response else 'no response'}"
            )
            raise PaymentError(PaymentErrorCode.TRANSFER_FAILED, "Failed to transfer funds")

        next_payment_date = add_one_month(subscription.next_payment_date)
        # SUCCESS and the date advance commit together or not at all
        async with self.session_factory() as db:
            await SubscriptionPaymentRepository(db).mark_success(payment_id, response.data.signature)
            await SubscriptionRepository(db).set_next_payment_date(subscription.id, next_payment_date)

        logger.info(
            f"{tag} Payment succeeded ({response.data.signature}), next payment on "
            f"{next_payment_date.isoformat()}"
        )

    async def _fail(self, subscription_id: int, payment_id: int, err: BaseException) -> None:
        tag = _tag(subscription_id)
        code, message = classify_payment_error(err)

        if isinstance(err, PaymentError):
            logger.error(f"{tag} Payment error occurred: {message} (code: {code})")
        elif isinstance(err, Exception):
            logger.error(f"{tag} Generic error occurred: {message}")
        else:
            logger.error(f"{tag} Unknown error occurred: {err!r}")

        logger.info(f"{tag} Marking subscription payment as failed")

        async with self.session_factory() as db:
            await SubscriptionRepository(db).deactivate(subscription_id)
            await SubscriptionPaymentRepository(db).mark_failed(
                payment_id,
                failure_code=code,
                failure_reason=message,
            )

    # ── Cancellations ──

    async def cancel_expired_subscriptions(self, now: datetime) -> int:
        async with self.session_factory() as db:
            expired = await SubscriptionRepository(db).find_expired(now)

        logger.info(f"{LOG_PREFIX} Fetched {len(expired)} subscriptions to cancel")

        results = await asyncio.gather(
            *(self._cancel_subscription(s.id) for s in expired),
            return_exceptions=True,
        )

        cancelled = 0
        for subscription, result in zip(expired, results):
            if isinstance(result, BaseException):
                logger.error(f"{_tag(subscription.id)} Cancellation failed: {result!r}")
            else:
                cancelled += 1
        return cancelled

    async def _cancel_subscription(self, subscription_id: int) -> None:
        logger.info(f"{_tag(subscription_id)} Cancelling subscription")
        async with self.session_factory() as db:
            await SubscriptionRepository(db).deactivate(subscription_id)


async def run_subscription_cron(
    wallet_assets: WalletAssetsProvider,
    transfer_executor: TransferExecutor,
    receive_wallet: str,
    now: Optional[datetime] = None,
) -> BillingSummary:
    """Run one full billing job (payments, then cancellations)."""
    service = SubscriptionBillingService(wallet_assets, transfer_executor, receive_wallet)
    return await service.run(now)
