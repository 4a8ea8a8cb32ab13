"""Subscription price and affordability check."""

from decimal import Decimal

import pytest

from app.payments.base import LAMPORTS_PER_SOL, SOL_MINT, Portfolio, TokenHolding
from app.payments.pricing import can_afford_subscription, get_sub_price, get_sub_price_float


class TestSubscriptionPrice:

    def test_price_from_env(self, monkeypatch):
        monkeypatch.setenv("EAP_SUBSCRIPTION_PRICE_SOL", "0.25")
        assert get_sub_price() == Decimal("0.25")
        assert get_sub_price_float() == 0.25

    @pytest.mark.parametrize("raw", ["abc", "-1", "0", "NaN", "Infinity"])
    def test_invalid_price_falls_back_to_default(self, monkeypatch, caplog, raw):
        monkeypatch.setenv("EAP_SUBSCRIPTION_PRICE_SOL", raw)
        with caplog.at_level("WARNING", logger="app.payments.pricing"):
            assert get_sub_price() == Decimal("0.1")
        assert any(
            r.levelname == "WARNING" and "EAP_SUBSCRIPTION_PRICE_SOL" in r.getMessage()
            for r in caplog.records
        )

    def test_valid_price_logs_nothing(self, monkeypatch, caplog):
        monkeypatch.setenv("EAP_SUBSCRIPTION_PRICE_SOL", "0.5")
        with caplog.at_level("WARNING", logger="app.payments.pricing"):
            get_sub_price()
        assert not caplog.records


class TestCanAffordSubscription:

    def test_exact_balance_is_enough(self):
        portfolio = Portfolio(owner="w", native_lamports=LAMPORTS_PER_SOL // 10)
        assert can_afford_subscription(portfolio) is True

    def test_one_lamport_short(self):
        portfolio = Portfolio(owner="w", native_lamports=LAMPORTS_PER_SOL // 10 - 1)
        assert can_afford_subscription(portfolio) is False

    def test_other_tokens_do_not_count(self):
        portfolio = Portfolio(
            owner="w",
            native_lamports=0,
            tokens=[TokenHolding(mint="USDCmint", symbol="USDC", amount=Decimal("1000"), decimals=6)],
        )
        assert can_afford_subscription(portfolio) is False

    def test_token_balance_of_sol_mint_is_native_balance(self):
        portfolio = Portfolio(owner="w", native_lamports=2 * LAMPORTS_PER_SOL)
        assert portfolio.token_balance(SOL_MINT) == Decimal(2)
