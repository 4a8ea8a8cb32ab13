"""
Helius DAS client - wallet-asset lookup used for the balance check.

Calls the `searchAssets` JSON-RPC method with the native SOL balance enabled
and turns the response into a Portfolio.

Env vars:
- HELIUS_API_KEY (required)
- HELIUS_RPC_URL (default https://mainnet.helius-rpc.com)
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Optional

import httpx

from app.core.config import get_helius_settings, get_http_timeout
from app.payments.base import Portfolio, TokenHolding, WalletAssetsProvider
from app.payments.errors import WalletAssetsError

logger = logging.getLogger(__name__)

SEARCH_PAGE_LIMIT = 1000


def parse_portfolio(owner: str, result: Dict[str, Any]) -> Portfolio:
    """Build a Portfolio from a `searchAssets` result object."""
    native = result.get("nativeBalance") or {}
    tokens = []
    for item in result.get("items") or []:
        info = item.get("token_info") or {}
        if "balance" not in info:
            continue
        decimals = int(info.get("decimals") or 0)
        price_info = info.get("price_info") or {}
        tokens.append(TokenHolding(
            mint=item.get("id", ""),
            symbol=info.get("symbol"),
            amount=Decimal(int(info["balance"])) / (Decimal(10) ** decimals),
            decimals=decimals,
            usd_value=price_info.get("total_price"),
        ))

    total_usd: Optional[float] = None
    priced = [t.usd_value for t in tokens if t.usd_value is not None]
    if native.get("total_price") is not None:
        priced.append(native["total_price"])
    if priced:
        total_usd = float(sum(priced))

    return Portfolio(
        owner=owner,
        native_lamports=int(native.get("lamports") or 0),
        tokens=tokens,
        total_usd_value=total_usd,
    )


class HeliusClient(WalletAssetsProvider):
    """Wallet-asset lookup through the Helius DAS API."""

    def __init__(
        self,
        rpc_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        default_url, default_key = get_helius_settings()
        self.rpc_url = rpc_url or default_url
        self.api_key = api_key or default_key
        self.timeout = timeout or get_http_timeout()
        self._transport = transport

    async def search_wallet_assets(self, owner: str) -> Portfolio:
        if not self.api_key:
            raise WalletAssetsError("HELIUS_API_KEY env var not set")

        payload = {
            "jsonrpc": "2.0",
            "id": "eap-billing",
            "method": "searchAssets",
            "params": {
                "ownerAddress": owner,
                "tokenType": "fungible",
                "page": 1,
                "limit": SEARCH_PAGE_LIMIT,
                "displayOptions": {"showNativeBalance": True},
            },
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                r = await client.post(self.rpc_url, params={"api-key": self.api_key}, json=payload)
                r.raise_for_status()
                body = r.json()
            except (httpx.HTTPError, ValueError) as e:
                raise WalletAssetsError(f"Helius searchAssets failed: {e}") from e

        if body.get("error"):
            error = body["error"]
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise WalletAssetsError(f"Helius searchAssets error: {message}")

        portfolio = parse_portfolio(owner, body.get("result") or {})
        logger.debug(
            f"Portfolio for {owner}: {portfolio.sol_balance} SOL, {len(portfolio.tokens)} token(s)"
        )
        return portfolio
