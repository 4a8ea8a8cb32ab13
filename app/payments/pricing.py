"""Subscription price and affordability check."""

import logging
from decimal import Decimal, InvalidOperation

from app.core.config import DEFAULT_SUBSCRIPTION_PRICE_SOL, get_subscription_price_raw
from app.payments.base import Portfolio

logger = logging.getLogger(__name__)


def get_sub_price() -> Decimal:
    """Monthly subscription price in SOL (EAP_SUBSCRIPTION_PRICE_SOL)."""
    raw = get_subscription_price_raw()
    try:
        price = Decimal(raw)
    except InvalidOperation:
        price = None
    if price is None or not price.is_finite() or price <= 0:
        logger.warning(
            f"Invalid EAP_SUBSCRIPTION_PRICE_SOL={raw!r}, "
            f"charging the default {DEFAULT_SUBSCRIPTION_PRICE_SOL} SOL"
        )
        price = Decimal(DEFAULT_SUBSCRIPTION_PRICE_SOL)
    return price


def get_sub_price_float() -> float:
    return float(get_sub_price())


def can_afford_subscription(portfolio: Portfolio) -> bool:
    """True when the wallet's native SOL balance covers one month."""
    return portfolio.sol_balance >= get_sub_price()
