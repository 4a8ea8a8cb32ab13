"""
Server Wallet Transfer Executor - sends tokens from custodial user wallets.

The signing service holds the user wallets; this client only asks it to move
funds and reports the resulting transaction signature.

Env vars:
- TRANSFER_API_URL (base URL of the signing service)
- TRANSFER_API_KEY (bearer token for the signing service)
"""

import logging
from typing import Any, Dict, Optional

import httpx

from app.core.config import get_http_timeout, get_transfer_settings
from app.payments.base import TransferData, TransferExecutor, TransferResult

logger = logging.getLogger(__name__)


def parse_transfer_response(body: Dict[str, Any]) -> TransferResult:
    """Turn the signing service JSON body into a TransferResult."""
    data = body.get("data")
    transfer_data = None
    if isinstance(data, dict):
        transfer_data = TransferData(signature=data.get("signature"), raw=data)
    return TransferResult(
        success=bool(body.get("success")),
        data=transfer_data,
        error=body.get("error"),
    )


class ServerWalletTransferExecutor(TransferExecutor):
    """Transfer executor backed by the server-side wallet signing service."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        default_url, default_key = get_transfer_settings()
        self.base_url = (base_url or default_url or "").rstrip("/")
        self.api_key = api_key or default_key
        self.timeout = timeout or get_http_timeout()
        self._transport = transport

    async def transfer_token(
        self,
        user_id: int,
        wallet_id: int,
        receiver_address: str,
        token_address: str,
        amount: float,
        token_symbol: str,
    ) -> Optional[TransferResult]:
        if not self.base_url:
            return TransferResult(success=False, error="TRANSFER_API_URL env var not set")

        payload = {
            "userId": user_id,
            "walletId": wallet_id,
            "receiverAddress": receiver_address,
            "tokenAddress": token_address,
            "amount": amount,
            "tokenSymbol": token_symbol,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                r = await client.post(f"{self.base_url}/transfers", json=payload, headers=headers)
            except httpx.HTTPError as e:
                logger.warning(f"Transfer request failed for wallet {wallet_id}: {e}")
                return TransferResult(success=False, error=str(e))

        try:
            body = r.json()
        except ValueError:
            body = {}

        if r.status_code >= 400:
            error = body.get("error") if isinstance(body, dict) else None
            logger.warning(
                f"Transfer rejected for wallet {wallet_id}: {r.status_code} {error or r.text}"
            )
            return TransferResult(success=False, error=error or f"HTTP {r.status_code}")

        if not isinstance(body, dict):
            return TransferResult(success=False, error="Malformed transfer response")
        return parse_transfer_response(body)
