"""
Billing collaborators - wallet-asset lookup, transfer executor and pricing.

Usage:
    from app.payments import get_wallet_assets_provider, get_transfer_executor

    portfolio = await get_wallet_assets_provider().search_wallet_assets(public_key)
    result = await get_transfer_executor().transfer_token(...)

Both getters are FastAPI dependencies, so tests swap them through
app.dependency_overrides.
"""

from app.payments.base import (
    SOL_MINT,
    SOL_SYMBOL,
    Portfolio,
    TokenHolding,
    TransferData,
    TransferExecutor,
    TransferResult,
    WalletAssetsProvider,
)
from app.payments.errors import (
    PaymentError,
    PaymentErrorCode,
    WalletAssetsError,
    classify_payment_error,
)
from app.payments.helius import HeliusClient
from app.payments.pricing import can_afford_subscription, get_sub_price, get_sub_price_float
from app.payments.transfer import ServerWalletTransferExecutor


def get_wallet_assets_provider() -> WalletAssetsProvider:
    """Return the configured wallet-asset lookup."""
    return HeliusClient()


def get_transfer_executor() -> TransferExecutor:
    """Return the configured transfer executor."""
    return ServerWalletTransferExecutor()


__all__ = [
    "get_wallet_assets_provider",
    "get_transfer_executor",
    "HeliusClient",
    "ServerWalletTransferExecutor",
    "WalletAssetsProvider",
    "TransferExecutor",
    "Portfolio",
    "TokenHolding",
    "TransferData",
    "TransferResult",
    "SOL_MINT",
    "SOL_SYMBOL",
    "PaymentError",
    "PaymentErrorCode",
    "WalletAssetsError",
    "classify_payment_error",
    "can_afford_subscription",
    "get_sub_price",
    "get_sub_price_float",
]
